"""wingen - install script generator for Windows package managers.

Resolves a selection of catalog packages into winget, Chocolatey and Scoop
install artifacts and encodes selections as shareable tokens.
"""

__version__ = "0.1.0"
