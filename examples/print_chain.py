"""
print_chain.py

Prints a four-level chain of wrapped errors, one per helper function,
so every line of the output points at a different function:

    print_chain.py:24:__main__.error1(): my error message 1
    `--print_chain.py:28:__main__.error2(): my error message 2
       `--print_chain.py:32:__main__.error3(): my error message 3
          `--print_chain.py:36:__main__.error4(): my error message 4

Run with RTERROR_PLAIN=1 to drop the colours.
"""

from __future__ import annotations

from rterror import RTError, new

# ============================================================================
# One helper per level
# ============================================================================

def error1() -> RTError:
    return new("my error message 1").wrap(error2())


def error2() -> RTError:
    return new("my error message 2").wrap(error3())


def error3() -> RTError:
    return new("my error message 3").wrap(error4())


def error4() -> RTError:
    return new("my error message 4")


if __name__ == "__main__":
    print(error1())
