"""reads the .msb declaration syntax into Target records.

A build file is a sequence of target declarations::

    target lib outputs(lib.o) [files(lib.c lib.h) targets()] {
        cc -c lib.c -o lib.o
    }
    target main outputs(main) [files(main.c) targets(lib)] {
        cc main.c lib.o -o main
    }

outputs(...) can be left out (the target is then phony and always runs).
File paths are separated by whitespace, target names by commas. The command
block runs up to the next closing brace; each non blank line is one command.
"""

import re

from .errors import ParseError
from .target import Target

_whitespace = re.compile(r'\s*')
_keyword = re.compile(r'target(?=\s)')
_identifier = re.compile(r'[A-Za-z0-9]+')
_fpath = re.compile(r'[^\s)]+')
_target_ref = re.compile(r'[^\s,)]+')


class Scanner(object):
    def __init__(self,text):
        self.text = text
        self.pos = 0

    @property
    def lineno(self):
        return self.text.count('\n',0,self.pos) + 1

    def error(self,message):
        raise ParseError(self.lineno,message)

    def skip_whitespace(self):
        self.pos = _whitespace.match(self.text,self.pos).end()

    def at_end(self):
        self.skip_whitespace()
        return self.pos >= len(self.text)

    def peek(self,literal):
        return self.text.startswith(literal,self.pos)

    def expect(self,literal):
        if not self.peek(literal):
            found = self.text[self.pos:self.pos+10].split('\n')[0] or 'end of file'
            self.error('expected %r but found %r' %(literal,found))
        self.pos += len(literal)

    def match(self,regex,what):
        m = regex.match(self.text,self.pos)
        if not m:
            self.error('expected %s' %what)
        self.pos = m.end()
        return m.group(0)

    def until(self,literal,what):
        end = self.text.find(literal,self.pos)
        if end < 0:
            self.error('unterminated %s' %what)
        chunk = self.text[self.pos:end]
        self.pos = end + len(literal)
        return chunk


def parse_paths(scanner,keyword):
    """keyword(path path ...)"""
    scanner.expect(keyword + '(')
    paths = []
    scanner.skip_whitespace()
    while not scanner.peek(')'):
        paths.append(scanner.match(_fpath,'a file path in %s(...)' %keyword))
        scanner.skip_whitespace()
    scanner.expect(')')
    return paths

def parse_target_refs(scanner):
    """targets(name, name ...)"""
    scanner.expect('targets(')
    names = []
    scanner.skip_whitespace()
    while not scanner.peek(')'):
        if names:
            scanner.expect(',')
            scanner.skip_whitespace()
        name = scanner.match(_target_ref,'a target name in targets(...)')
        if not _identifier.fullmatch(name):
            scanner.error('target names must be alphanumeric, got %r' %name)
        names.append(name)
        scanner.skip_whitespace()
    scanner.expect(')')
    return names

def parse_commands(scanner):
    scanner.expect('{')
    body = scanner.until('}','command block')
    return [line.strip() for line in body.splitlines() if line.strip()]

def parse_target(scanner):
    scanner.match(_keyword,"'target'")
    scanner.skip_whitespace()
    name = scanner.match(_identifier,'an alphanumeric target name')
    scanner.skip_whitespace()

    outputs = []
    if scanner.peek('outputs('):
        outputs = parse_paths(scanner,'outputs')
        scanner.skip_whitespace()

    inputs, dependencies = [], []
    scanner.expect('[')
    scanner.skip_whitespace()
    if scanner.peek('files('):
        inputs = parse_paths(scanner,'files')
        scanner.skip_whitespace()
    if scanner.peek('targets('):
        dependencies = parse_target_refs(scanner)
        scanner.skip_whitespace()
    scanner.expect(']')
    scanner.skip_whitespace()

    recipe = parse_commands(scanner)
    return Target(name,outputs,inputs,dependencies,recipe)

def parse(text):
    """returns the list of targets declared in text, in order. Raises
    ParseError."""
    scanner = Scanner(text)
    targets = []
    while not scanner.at_end():
        targets.append(parse_target(scanner))
    return targets

def parse_file(fpath):
    with open(fpath) as fobj:
        return parse(fobj.read())
