"""Module log_utils of leedcompare.lib.

Collects functions useful for handling logging features.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

from logging import DEBUG


def debug_or_lower(logger, effective=True):
    """Return whether `logger` has a level less than DEBUG.

    Parameters
    ----------
    logger : logging.Logger
        The logger whose level should be checked.
    effective : bool, optional
        Whether the level inherited from the parents of `logger`
        should be considered. Default is True.

    Returns
    -------
    debug_or_lower : bool
    """
    level = logger.getEffectiveLevel() if effective else logger.level
    return level <= DEBUG
