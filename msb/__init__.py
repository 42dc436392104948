"""msb, a minimal build tool"""

from .errors import (BuildError, ParseError, DuplicateTargetError, UnknownTargetError,
                     UnknownDependencyError, CycleError, MissingInputError, RecipeFailure)
from .target import Target, TargetRegistry
from .graph import DependencyGraph
from .record import BuildRecord, State
from .staleness import StalenessEvaluator
from .scheduler import Scheduler, BuildResult, Success, Failure
from .parser import parse, parse_file
from .makefile import Makefile, main

__version__ = '0.1.0'
