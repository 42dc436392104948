"""the per-build record of target states"""

import threading


class State(object):
    NOT_VISITED = 'NotVisited'
    STALE = 'Stale'
    UP_TO_DATE = 'UpToDate'
    BUILT = 'Built'
    FAILED = 'Failed'

    #allowed state changes. Stale -> UpToDate happens when the re-check just
    #before execution finds that the target no longer needs rebuilding.
    transitions = {
        NOT_VISITED: (STALE,UP_TO_DATE),
        STALE: (BUILT,FAILED,UP_TO_DATE),
        UP_TO_DATE: (),
        BUILT: (),
        FAILED: (),
    }


class BuildRecord(object):
    """Mapping of target name to State for a single build invocation. It is
    created empty for every build and thrown away afterwards; nothing is
    persisted between runs.

    Every entry is written under a lock so that the threaded scheduler can
    share one record between its workers.
    """

    def __init__(self):
        self.states = {}
        self.durations = {} #name:seconds spent running the recipe
        self.built = [] #names of built targets in the order they finished
        self._lock = threading.Lock()

    def get(self,name):
        with self._lock:
            return self.states.get(name,State.NOT_VISITED)

    def mark(self,name,state,duration=None):
        with self._lock:
            current = self.states.get(name,State.NOT_VISITED)
            if state not in State.transitions[current]:
                raise AssertionError("target %r can't go from %s to %s" %(name,current,state))
            self.states[name] = state
            if duration is not None:
                self.durations[name] = duration
            if state == State.BUILT:
                self.built.append(name)

    def names_in(self,state,order=None):
        """names of targets currently in state, following order if given"""
        with self._lock:
            names = order if order is not None else list(self.states)
            return [name for name in names if self.states.get(name,State.NOT_VISITED) == state]

    def built_targets(self):
        with self._lock:
            return list(self.built)

    def __repr__(self):
        return '<%s.%s %r>' %(self.__module__,self.__class__.__name__,self.states)
