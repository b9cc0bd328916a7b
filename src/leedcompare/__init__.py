"""=================
   leedcompare
=================

Comparison of two sets of LEED I(V) curves by means of R factors,
optionally optimizing the energy shift between the two.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'
__version__ = '0.1.0'

from leedcompare.classes.dataset import IVDataset
from leedcompare.classes.energy_grid import EnergyGrid
from leedcompare.classes.metric import ComparisonResult
from leedcompare.classes.metric import RFactorType
from leedcompare.classes.settings import ComparisonSettings
from leedcompare.classes.spot_pattern import SpotPattern
from leedcompare.comparison.averaging import average_symmetric
from leedcompare.comparison.compare import compare
from leedcompare.comparison.compare import compare_with_settings
from leedcompare.comparison.compare import get_r_factor
from leedcompare.comparison.compare import normalize_to_overlap_max
from leedcompare.comparison.compare import prepare_datasets
from leedcompare.comparison.correspondence import build_correspondence
from leedcompare.comparison.grid import align_grids
