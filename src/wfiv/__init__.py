"""wfiv - A command-line Google webfonts viewer.

wfiv lists the font families available from Google Fonts and renders
previews of selected families inline in terminals that support images
(kitty, iTerm2, WezTerm, ...). Downloads are kept in an on-disk cache.

Example:
    $ wfiv --key $WFIV_KEY show 'Roboto*' 'Open Sans'

This will render a preview of every family whose name starts with Roboto,
followed by Open Sans.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
