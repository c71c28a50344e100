import sys
from typing import Optional, TextIO

FAILURE_MESSAGE = "😭 Sorry, that image build failed."


def report(image_id: str, out: Optional[TextIO] = None) -> int:
    """Print the built image ID, or the failure message if there is none, and return the exit code."""
    out = out or sys.stdout
    if not image_id:
        print(FAILURE_MESSAGE, file=out)
        return 1
    print(image_id, file=out)
    return 0
