"""msb, a minimal build tool.

Reads target declarations (see msb.parser), checks them and rebuilds the
targets whose outputs are older than their inputs, in dependency order.
"""

import argparse
import os.path
import sys

from . import parser
from .errors import BuildError
from .graph import DependencyGraph
from .record import BuildRecord
from .scheduler import Scheduler
from .staleness import StalenessEvaluator
from .target import TargetRegistry


class Makefile(object):
    """A validated set of targets. Building the registry and the graph is done
    up front so that duplicate names, unknown dependencies and cycles are all
    reported before anything runs.

        mk = Makefile.from_file('build.msb')
        result = mk.build_target('main')
        if not result:
            print(result.error)
    """

    def __init__(self,targets):
        self.registry = TargetRegistry(targets)
        self.graph = DependencyGraph.build(self.registry)

    @classmethod
    def from_str(cls,text):
        return cls(parser.parse(text))

    @classmethod
    def from_file(cls,fpath):
        return cls(parser.parse_file(fpath))

    def get_targets(self):
        return list(self.registry)

    def get_target(self,name):
        return self.registry.lookup(name)

    def calc_build(self,goal):
        """names of the targets that building goal would run, in order"""
        evaluator = StalenessEvaluator(self.registry,BuildRecord())
        return evaluator.stale_targets(self.graph.build_order(goal))

    def build_target(self,goal,run=None,jobs=1,listener=None,join_timeout=None):
        """builds goal and returns a Success or a Failure"""
        scheduler = Scheduler(self.graph,run=run,jobs=jobs,listener=listener,join_timeout=join_timeout)
        return scheduler.build(goal)

    def describe(self):
        """lines listing every target and what it depends on"""
        lines = []
        for i,target in enumerate(self.registry):
            lines.append('%d: %s' %(i,target.name))
            if not target.inputs and not target.dependencies:
                lines.append('Does not depend on anything')
                continue
            lines.append('Depends on:')
            if target.inputs:
                lines.append('  These files:')
                lines.extend('    %s' %fpath for fpath in target.inputs)
            if target.dependencies:
                lines.append('  These targets:')
                lines.extend('    %s' %name for name in target.dependencies)
        return lines

    @staticmethod
    def main(argv=None):
        """command line interface for msb"""
        argparser = argparse.ArgumentParser(prog='msb',description='msb, a minimal build tool')
        argparser.add_argument('input_name',nargs='?',default='build.msb',
                               help='path to the build file (default: build.msb)')
        argparser.add_argument('target',nargs='?',default='main',help='target to build (default: main)')
        argparser.add_argument('--print-targets',dest='print_targets',action='store_true',
                               help='print the available targets in the build file')
        argparser.add_argument('-n','--dry-run',dest='dryrun',action='store_true',
                               help='only print the targets that would be built')
        argparser.add_argument('-j','--jobs',type=int,default=1,
                               help='number of targets to build at the same time (default: 1)')
        args = argparser.parse_args(argv)

        if not os.path.isfile(args.input_name):
            print('Error: Build file does not exist: %s' %args.input_name,file=sys.stderr)
            print('Run with -h to print help',file=sys.stderr)
            return 1

        try:
            mk = Makefile.from_file(args.input_name)
            if args.print_targets:
                for line in mk.describe():
                    print(line)
                return 0

            print('Building target:',args.target)
            if args.dryrun:
                print('Build sequence:')
                for name in mk.calc_build(args.target):
                    print(name)
                return 0
            result = mk.build_target(args.target,jobs=args.jobs,listener=_print_progress)
        except BuildError as e:
            print('Error: %s' %e,file=sys.stderr)
            return 1

        if not result:
            print('Error: %s' %result.error,file=sys.stderr)
            return 1
        return 0


def _print_progress(event,name,detail):
    if event == 'command':
        print(detail)
    elif event == 'built':
        print('Building target `%s` took: %.2fs' %(name,detail))
    elif event == 'uptodate':
        print('Target `%s` is up to date' %name)
    sys.stdout.flush()


def main(argv=None):
    sys.exit(Makefile.main(argv))
