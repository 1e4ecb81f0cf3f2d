"""Package entry point for ``python -m subtitle_converter``.

WHY: Users convert files as ``python -m subtitle_converter song.lrc --to srt``
or start the HTTP API with ``python -m subtitle_converter --serve``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.

HOW: Checks sys.argv for the ``--serve`` flag. If present, starts the
FastAPI app under uvicorn. Otherwise, delegates to the CLI's main().

RULES:
- ``--serve`` launches the HTTP API
- Without ``--serve``, falls through to the CLI
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from subtitle_converter.server.app import run_api
        run_api()
    else:
        from subtitle_converter.cli import main
        main()
