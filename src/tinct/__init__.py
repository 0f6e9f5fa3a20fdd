"""tinct — theme-driven dotfile templating.

Loads a color theme, merges variables from config and the command line,
renders text templates through them and runs hooks afterwards.
"""

from tinct.version import __version__

__all__: list[str] = ["__version__"]
