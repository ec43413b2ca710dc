"""Package entry point for ``python -m deepgram_converter``.

WHY: Users run the converter as ``python -m deepgram_converter convert
input.json --format srt`` without installing the console script.

HOW: Delegates to the CLI's main() and exits with its return code.
"""

import sys

from deepgram_converter.cli import main

if __name__ == "__main__":
    sys.exit(main())
