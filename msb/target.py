"""target declarations and the registry that owns them"""

import warnings

from ordered_set import OrderedSet

from .errors import DuplicateTargetError, UnknownTargetError
from .utils import checkseq, dedup


class Target(object):
    """A named build unit. Targets are immutable once created; every other
    part of msb refers to them by name through a TargetRegistry.

    name - unique alphanumeric identifier
    outputs - paths produced by the recipe. No outputs means a phony target
        which is rebuilt on every run.
    inputs - paths read by the recipe (sources or other targets' outputs)
    dependencies - names of targets that must be built first
    recipe - shell command lines, run in order
    """
    __slots__ = ('_name','_outputs','_inputs','_dependencies','_recipe')

    def __init__(self,name,outputs=None,inputs=None,dependencies=None,recipe=None):
        object.__setattr__(self,'_name',name)
        object.__setattr__(self,'_outputs',tuple(dedup(checkseq(outputs))))
        object.__setattr__(self,'_inputs',OrderedSet(checkseq(inputs)))
        object.__setattr__(self,'_dependencies',OrderedSet(checkseq(dependencies)))
        object.__setattr__(self,'_recipe',tuple(checkseq(recipe)))

    def __setattr__(self,key,value):
        raise AttributeError('%s is read-only' %self.__class__.__name__)
    __delattr__ = __setattr__

    @property
    def name(self):
        return self._name

    @property
    def outputs(self):
        return self._outputs

    #copies so that callers can't mutate the declaration
    @property
    def inputs(self):
        return OrderedSet(self._inputs)

    @property
    def dependencies(self):
        return OrderedSet(self._dependencies)

    @property
    def recipe(self):
        return self._recipe

    @property
    def phony(self):
        return len(self._outputs) == 0

    def __eq__(self,other):
        if not isinstance(other,Target):
            return NotImplemented
        return (self._name,self._outputs,list(self._inputs),list(self._dependencies),self._recipe) == \
               (other._name,other._outputs,list(other._inputs),list(other._dependencies),other._recipe)

    def __hash__(self):
        return hash(self._name)

    def __repr__(self):
        return '<%s.%s(%r, outputs=%r...) at %s>' %(self.__module__,self.__class__.__name__,
                                                    self._name,list(self._outputs),hex(id(self)))


class TargetRegistry(object):
    """Holds every declared target keyed by name, in declaration order."""

    def __init__(self,targets=None):
        self.targets = {}
        self.producers = {} #output path:target name
        for target in checkseq(targets):
            self.register(target)

    def register(self,target):
        if target.name in self.targets:
            raise DuplicateTargetError(target.name)
        self.targets[target.name] = target
        for output in target.outputs:
            if output in self.producers:
                warnings.warn('%r is an output of both %r and %r, using %r'
                              %(output,self.producers[output],target.name,target.name),stacklevel=2)
            self.producers[output] = target.name
        return target

    def lookup(self,name):
        try:
            return self.targets[name]
        except KeyError:
            raise UnknownTargetError(name) from None

    def producer_of(self,fpath):
        """name of the target declaring fpath as an output, or None"""
        return self.producers.get(fpath)

    def names(self):
        return list(self.targets)

    def __contains__(self,name):
        return name in self.targets

    def __iter__(self):
        return iter(self.targets.values())

    def __len__(self):
        return len(self.targets)
