"""runs the recipes of stale targets in dependency order"""

import heapq
import queue
import threading
import time

from . import shell
from .errors import RecipeFailure
from .record import BuildRecord, State
from .staleness import StalenessEvaluator

CANCELLED = 'cancelled'


class BuildResult(object):
    succeeded = None

    def __bool__(self):
        return self.succeeded


class Success(BuildResult):
    """built - targets whose recipes ran, in the order they finished
    up_to_date - targets that didn't need rebuilding"""
    succeeded = True

    def __init__(self,built,up_to_date):
        self.built = list(built)
        self.up_to_date = list(up_to_date)

    def __repr__(self):
        return 'Success(built=%r, up_to_date=%r)' %(self.built,self.up_to_date)


class Failure(BuildResult):
    """failed_target/exit_code - the first recipe that failed
    built - targets built before the failure
    error - the RecipeFailure, with the index of the failing recipe line"""
    succeeded = False

    def __init__(self,failed_target,exit_code,built,up_to_date=(),error=None):
        self.failed_target = failed_target
        self.exit_code = exit_code
        self.built = list(built)
        self.up_to_date = list(up_to_date)
        self.error = error

    def __repr__(self):
        return 'Failure(failed_target=%r, exit_code=%r, built=%r)' %(self.failed_target,self.exit_code,self.built)


class WorkQueue(object):
    """Targets of a build order, each behind a gate counting its unfinished
    dependencies. A target becomes ready when its gate drops to zero. Ready
    targets come out in build order position so that a sequential build runs
    exactly in build order."""

    def __init__(self,graph,order):
        self.position = dict((name,i) for i,name in enumerate(order))
        self.gates = {}
        self.dependents = {}
        self.ready = []
        for name in order:
            self.gates[name] = len(graph.dependencies_of(name))
            self.dependents[name] = [dep for dep in graph.dependents_of(name) if dep in self.position]
            if self.gates[name] == 0:
                heapq.heappush(self.ready,(self.position[name],name))

    def has_ready(self):
        return len(self.ready) > 0

    def pop(self):
        return heapq.heappop(self.ready)[1]

    def done(self,name):
        """release the gates of name's dependents"""
        for dependent in self.dependents[name]:
            self.gates[dependent] -= 1
            if self.gates[dependent] == 0:
                heapq.heappush(self.ready,(self.position[dependent],dependent))


class WorkerThread(threading.Thread):
    def __init__(self,scheduler,build,tasks,events):
        super(WorkerThread,self).__init__()
        self.daemon = True
        self.scheduler = scheduler
        self.build = build
        self.tasks = tasks
        self.events = events

    def run(self):
        while True:
            name = self.tasks.get()
            if name is None:
                break
            try:
                outcome = self.scheduler.execute(self.build,name)
            except Exception as e:
                outcome = e
            self.events.put((name,outcome))


class Build(object):
    """state of one Scheduler.build call: its record, the evaluator reading
    it and the event telling workers to stop."""

    def __init__(self,registry,record=None):
        self.record = record if record is not None else BuildRecord()
        self.evaluator = StalenessEvaluator(registry,self.record)
        self.cancelled = threading.Event()


class Scheduler(object):
    """Builds a goal target of a dependency graph.

    run - callable taking a command line and returning its exit code
    jobs - number of targets allowed to run at the same time. With 1 (the
        default) everything runs in the calling thread.
    listener - optional callable(event,name,detail) told about progress. The
        events are 'start', 'command' (detail is the command line), 'built'
        (detail is the elapsed time in seconds), 'uptodate' and 'failed'
        (detail is the RecipeFailure).
    join_timeout - after a failure, how long to wait for each still running
        target before giving up on it. None waits for them.

    The scheduler keeps no state between builds; everything belonging to one
    invocation lives in a Build.
    """

    def __init__(self,graph,run=None,jobs=1,listener=None,join_timeout=None):
        self.graph = graph
        self.registry = graph.registry
        self.run = run if run is not None else shell.run
        self.jobs = max(1,jobs)
        self.listener = listener
        self.join_timeout = join_timeout

    def report(self,event,name,detail=None):
        if self.listener is not None:
            self.listener(event,name,detail)

    def build(self,goal,record=None):
        """build goal and everything it depends on. Returns Success or
        Failure. Errors found before any recipe runs (UnknownTargetError,
        MissingInputError) are raised.

        record - BuildRecord to fill in, a new one by default
        """
        build = Build(self.registry,record)

        order = self.graph.build_order(goal)
        #decide everything against the filesystem as it is before the build
        build.evaluator.stale_targets(order)

        work = WorkQueue(self.graph,order)
        if self.jobs == 1:
            failure = self._run_sequential(build,work)
        else:
            failure = self._run_threaded(build,work)

        built = build.record.built_targets()
        up_to_date = build.record.names_in(State.UP_TO_DATE,order)
        if failure is None:
            return Success(built,up_to_date)
        return Failure(failure.target,failure.exit_code,built,up_to_date,failure)

    def execute(self,build,name):
        """runs the recipe of name if it is stale. Returns None on success, the
        RecipeFailure on failure or CANCELLED when the build was aborted
        before or in the middle of the recipe."""
        if build.cancelled.is_set():
            return CANCELLED
        if not build.evaluator.is_stale(name):
            self.report('uptodate',name)
            return None
        if not build.evaluator.needs_rebuild(name):
            build.record.mark(name,State.UP_TO_DATE)
            self.report('uptodate',name)
            return None

        target = self.registry.lookup(name)
        self.report('start',name)
        start = time.perf_counter()
        for i,line in enumerate(target.recipe):
            if build.cancelled.is_set():
                return CANCELLED
            self.report('command',name,line)
            exit_code = self.run(line)
            if exit_code != 0:
                failure = RecipeFailure(name,i,exit_code,line)
                build.record.mark(name,State.FAILED)
                build.cancelled.set()
                self.report('failed',name,failure)
                return failure
        elapsed = time.perf_counter() - start
        build.record.mark(name,State.BUILT,elapsed)
        self.report('built',name,elapsed)
        return None

    def _run_sequential(self,build,work):
        while work.has_ready():
            name = work.pop()
            outcome = self.execute(build,name)
            if outcome is not None:
                return outcome
            work.done(name)
        return None

    def _run_threaded(self,build,work):
        tasks = queue.Queue()
        events = queue.Queue()
        workers = [WorkerThread(self,build,tasks,events) for i in range(self.jobs)]
        for worker in workers:
            worker.start()

        failure = None
        error = None
        in_flight = 0
        try:
            while True:
                #a failing worker sets cancelled before its event arrives
                stopping = build.cancelled.is_set() or failure is not None or error is not None
                while not stopping and work.has_ready() and in_flight < self.jobs:
                    tasks.put(work.pop())
                    in_flight += 1
                if in_flight == 0:
                    break
                try:
                    name,outcome = events.get(timeout=self.join_timeout if stopping else None)
                except queue.Empty:
                    break #give up on the targets still running
                in_flight -= 1
                if isinstance(outcome,RecipeFailure):
                    if failure is None:
                        failure = outcome
                    build.cancelled.set()
                elif isinstance(outcome,Exception):
                    if error is None:
                        error = outcome
                    build.cancelled.set()
                elif outcome is None and not build.cancelled.is_set():
                    work.done(name)
        finally:
            for worker in workers:
                tasks.put(None)

        if error is not None:
            raise error
        return failure
