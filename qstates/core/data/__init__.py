from .make import *
from . import make
