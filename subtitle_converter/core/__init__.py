"""Core IR, time codec, detection, and timeline transforms.

WHY: The core package is the stable heart of the converter — the IR
dataclasses every format module shares, the one time codec they all
encode and decode with, format detection, and the cue transforms the
editor applies between import and export.

HOW: ir.py defines the data structures, timecode.py the timestamp
grammars, detect.py the filename/content classifier, timeline.py the
pure cue-list edits.

RULES:
- IR dataclasses are the contract — change with care
- No format-specific grammar outside timecode.py and formats/
- Everything here is pure: no I/O, no shared mutable state
"""
