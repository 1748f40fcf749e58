# -*- coding: utf-8 -*-
"""lkalign: Lucas-Kanade alignment of planar warps on image pyramids

The aligners live in lkalign.align, the sampling and linear algebra
helpers in lkalign.math. Logging is configured from the command line
(--log, --logfile) when the package is imported.
"""

import logging
from .utils.cli import logging_cliconfig

try:
    from ._version import version as __version__
except ImportError:
    import os

    __version__ = "Local version ({})".format(
        os.path.dirname(os.path.abspath(__file__))
    )

logger = logging.getLogger(__name__)
logging_cliconfig(logger)
