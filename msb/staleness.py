"""decides which targets have to be rebuilt using file modification times"""

from .errors import MissingInputError
from .record import State
from .utils import StatCache, get_mtime


class StalenessEvaluator(object):
    """Answers 'does this target need rebuilding?' for one build.

    Results are memoized in the build record: once a target has been marked
    Stale or UpToDate it is never evaluated again during that build, even if
    recipes change the filesystem afterwards. Timestamps are looked up once
    per path (see StatCache) so that the whole evaluation sees the filesystem
    as it was before the build started.
    """

    def __init__(self,registry,record):
        self.registry = registry
        self.record = record
        self.get_mtime = StatCache()

    def is_stale(self,name):
        state = self.record.get(name)
        if state != State.NOT_VISITED:
            return state != State.UP_TO_DATE
        target = self.registry.lookup(name)
        self.check_inputs(target)

        #every dependency gets evaluated (and recorded), no short cut
        stale = False
        for dep in target.dependencies:
            if self.is_stale(dep):
                stale = True
        if not stale:
            stale = self.files_stale(target,self.get_mtime)

        self.record.mark(name,State.STALE if stale else State.UP_TO_DATE)
        return stale

    def check_inputs(self,target):
        """raises MissingInputError for an input that is neither on disk nor
        produced by any target. Phony targets are not checked."""
        if target.phony:
            return
        for fpath in target.inputs:
            if self.get_mtime(fpath) is None and self.registry.producer_of(fpath) is None:
                raise MissingInputError(target.name,fpath)

    def needs_rebuild(self,name):
        """re-check a stale target just before its recipe would run, against
        the current filesystem rather than the cached timestamps."""
        target = self.registry.lookup(name)
        if target.phony:
            return True
        if any(self.record.get(dep) == State.BUILT for dep in target.dependencies):
            return True
        return self.files_stale(target,get_mtime)

    def files_stale(self,target,get_mtime):
        """compares the target's outputs with its inputs. A phony target (no
        outputs) is always stale. Otherwise it is stale if an output or an
        input is missing, or an input is strictly newer than the oldest
        output. Equal timestamps are up to date.
        """
        if target.phony:
            return True

        output_mtimes = [get_mtime(output) for output in target.outputs]
        if any(mtime is None for mtime in output_mtimes):
            return True
        oldest_output = min(output_mtimes)

        for fpath in target.inputs:
            mtime = get_mtime(fpath)
            if mtime is None or mtime > oldest_output:
                return True
        return False

    def stale_targets(self,order):
        """evaluates every target of order and returns the stale ones, in
        order."""
        return [name for name in order if self.is_stale(name)]
