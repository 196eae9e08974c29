"""
connect_four.interfaces - Front-ends for Connect Four

This package contains the terminal and browser interfaces. Neither is
imported here so that the CLI does not pull in Flask until it is needed.
"""

__all__ = []
