"""exception types raised by the msb build engine. Every error carries the
names/paths needed to print a diagnostic; none of them print anything."""


class BuildError(Exception):
    """base class of all msb errors"""


class ParseError(BuildError):
    def __init__(self,lineno,message):
        self.lineno = lineno
        self.message = message
        super(ParseError,self).__init__('line %d: %s' %(lineno,message))


class DuplicateTargetError(BuildError):
    def __init__(self,name):
        self.name = name
        super(DuplicateTargetError,self).__init__('target %r is declared more than once' %name)


class UnknownTargetError(BuildError):
    def __init__(self,name):
        self.name = name
        super(UnknownTargetError,self).__init__('no target named %r' %name)


class UnknownDependencyError(BuildError):
    def __init__(self,target,missing):
        self.target = target
        self.missing = missing
        super(UnknownDependencyError,self).__init__(
            'target %r depends on unknown target %r' %(target,missing))


class CycleError(BuildError):
    """path is the list of target names around the cycle, the first name
    repeated at the end i.e. ['a','b','a']"""
    def __init__(self,path):
        self.path = list(path)
        super(CycleError,self).__init__('circular dependency: %s' %' -> '.join(self.path))


class MissingInputError(BuildError):
    def __init__(self,target,path):
        self.target = target
        self.path = path
        super(MissingInputError,self).__init__(
            'no target or file found for %r (input of target %r)' %(path,target))


class RecipeFailure(BuildError):
    """a recipe line exited nonzero. Returned inside a Failure result rather
    than raised out of a build."""
    def __init__(self,target,line_index,exit_code,command=None):
        self.target = target
        self.line_index = line_index
        self.exit_code = exit_code
        self.command = command
        super(RecipeFailure,self).__init__(
            'recipe of target %r failed at line %d with exit code %d' %(target,line_index+1,exit_code))
