"""shared fixtures for the msb unit tests.

Tests run inside a fresh temporary directory. Recipes are run by FakeShell
which understands 'touch PATH...' and 'exit N' and stamps every file it
touches with the next tick of a fake clock, so that modification times are
strictly increasing however fast the tests run.
"""

import os
import shutil
import tempfile
import threading
import unittest

from sh import touch

from msb import Makefile

#the lib/main project from the README
LIB_MAIN = """
target lib outputs(lib.o) [files(lib.c) targets()] { touch lib.o }
target main outputs(main) [files(main.c) targets(lib)] { touch main }
"""


class FakeShell(object):
    def __init__(self,start=1000000):
        self.clock = start
        self.commands = []
        self._lock = threading.Lock()

    def tick(self):
        with self._lock:
            self.clock += 1
            return self.clock * 10**9

    def touch(self,*paths):
        """create paths if needed and make them the newest files around"""
        for fpath in paths:
            if not os.path.exists(fpath):
                touch(fpath)
            t = self.tick()
            os.utime(fpath,ns=(t,t))

    def set_mtime(self,fpath,seconds):
        os.utime(fpath,ns=(seconds*10**9,seconds*10**9))

    def __call__(self,line):
        with self._lock:
            self.commands.append(line)
        words = line.split()
        if words[0] == 'touch':
            self.touch(*words[1:])
        elif words[0] == 'exit':
            return int(words[1])
        return 0


class Events(object):
    """listener recording (event,name) pairs"""
    def __init__(self):
        self.events = []
        self._lock = threading.Lock()

    def __call__(self,event,name,detail):
        with self._lock:
            self.events.append((event,name))

    def names(self,event):
        return [name for e,name in self.events if e == event]


class BaseTestBuilds(unittest.TestCase):
    """runs each test in an empty temporary directory with a FakeShell"""

    def setUp(self):
        self.olddir = os.getcwd()
        self.tmpdir = tempfile.mkdtemp(prefix='msb-unittests-')
        os.chdir(self.tmpdir)
        self.shell = FakeShell()

    def tearDown(self):
        os.chdir(self.olddir)
        shutil.rmtree(self.tmpdir)

    def build(self,mk,goal,**kwargs):
        """builds goal and returns (result, commands run by this build)"""
        done = len(self.shell.commands)
        result = mk.build_target(goal,run=self.shell,**kwargs)
        return result,self.shell.commands[done:]

    def lib_main(self):
        self.shell.touch('lib.c','main.c')
        return Makefile.from_str(LIB_MAIN)
