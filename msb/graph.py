"""dependency graph over the targets of a registry"""

import warnings

from ordered_set import OrderedSet

from .errors import CycleError, UnknownDependencyError


class DependencyGraph(object):
    """Directed acyclic graph where an edge A -> B means that target A depends
    on target B, so B must be built first. Nodes are target names; the targets
    themselves stay owned by the registry.

    Use DependencyGraph.build(registry) rather than the constructor, it
    validates the graph.
    """

    def __init__(self,registry):
        self.registry = registry
        self.edges = {} #name:OrderedSet of dependency names
        self.reverse_edges = {} #name:OrderedSet of dependent names
        self.order = OrderedSet() #topological order of every target

    @classmethod
    def build(cls,registry):
        """builds and validates the graph. Raises UnknownDependencyError or
        CycleError."""
        graph = cls(registry)
        for target in registry:
            graph.edges[target.name] = target.dependencies
            graph.reverse_edges.setdefault(target.name,OrderedSet())
            for dep in target.dependencies:
                graph.reverse_edges.setdefault(dep,OrderedSet()).add(target.name)

        for target in registry:
            graph._resolve(target.name,[],set())
        graph._check_producers()
        return graph

    def _resolve(self,name,path,on_path):
        """depth first search. path/on_path hold the targets of the current
        traversal, self.order the fully resolved ones (in postorder which is a
        valid build order)."""
        if name in self.order:
            return
        if name in on_path:
            raise CycleError(path[path.index(name):] + [name])
        path.append(name)
        on_path.add(name)
        for dep in self.edges[name]:
            if dep not in self.registry:
                raise UnknownDependencyError(name,dep)
            self._resolve(dep,path,on_path)
        path.pop()
        on_path.remove(name)
        self.order.add(name)

    def _check_producers(self):
        """inputs produced by some other target should be reachable through the
        declared dependencies, otherwise nothing orders the two targets."""
        for target in self.registry:
            closure = None
            for fpath in target.inputs:
                producer = self.registry.producer_of(fpath)
                if producer is None or producer == target.name:
                    continue
                if closure is None:
                    closure = self.closure(target.name)
                if producer not in closure:
                    warnings.warn('target %r reads %r which is produced by %r but does not depend on it'
                                  %(target.name,fpath,producer),stacklevel=3)

    def dependencies_of(self,name):
        self.registry.lookup(name)
        return OrderedSet(self.edges[name])

    def dependents_of(self,name):
        self.registry.lookup(name)
        return OrderedSet(self.reverse_edges[name])

    def closure(self,goal):
        """the goal and every target it transitively depends on"""
        return OrderedSet(self.build_order(goal))

    def build_order(self,goal):
        """list of target names in the goal's closure where every target
        comes after all of its dependencies, ending with the goal."""
        self.registry.lookup(goal) #raises UnknownTargetError
        seen = set()
        order = []
        stack = [(goal,iter(self.edges[goal]))]
        seen.add(goal)
        while stack:
            name,deps = stack[-1]
            for dep in deps:
                if dep not in seen:
                    seen.add(dep)
                    stack.append((dep,iter(self.edges[dep])))
                    break
            else:
                stack.pop()
                order.append(name)
        return order
