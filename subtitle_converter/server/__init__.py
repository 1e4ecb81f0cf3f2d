"""HTTP API for the subtitle converter.

WHY: The editor front end and external tools reach the converter over
HTTP rather than importing it.

HOW: app.py holds the FastAPI application and endpoints, models.py the
pydantic request/response schemas and their IR conversions.
"""
