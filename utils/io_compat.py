# io_compat.py
import sys


def setup_stdout_utf8() -> None:
    """
    Switch stdout/stderr to UTF-8 and replace characters the console cannot
    print instead of raising UnicodeEncodeError (Windows/CP1250 consoles).
    """
    for stream in (sys.stdout, sys.stderr):
        if not hasattr(stream, "reconfigure"):
            continue
        try:
            stream.reconfigure(encoding="utf-8", errors="replace")
        except (OSError, ValueError):
            # stream already in use / wrapped by a test runner: keep its encoding
            pass


def print_safe(*args, **kwargs):
    """
    print() that survives axis/pillar names the console encoding cannot show.
    """
    try:
        print(*args, **kwargs)
    except UnicodeEncodeError:
        text = " ".join(str(a) for a in args)
        end = kwargs.get("end", "\n")
        sys.stdout.write(text.encode("ascii", "backslashreplace").decode("ascii") + end)
