from .options import *
from .errors import *
from .dimensions import *
from .qobj import *
from .expect import *
from .tensor import *
from .states import *
from .operators import *
from . import data
