import qstates.settings
from qstates.settings import settings
import qstates.version
from qstates.version import version as __version__

# -----------------------------------------------------------------------------
# Load modules
#

from .core import *
