#!/usr/bin/env python
"""module of unit tests for the .msb parser"""

import os.path
import unittest

from msb import parse, parse_file, ParseError, Target, Makefile


class TestParse(unittest.TestCase):

    def test_one_line_declarations(self):
        targets = parse("""
target lib outputs(lib.o) [files(lib.c) targets()] { cc -c lib.c -o lib.o }
target main outputs(main) [files(main.c) targets(lib)] { cc main.c lib.o -o main }
""")
        self.assertEqual(targets,[
            Target('lib',['lib.o'],['lib.c'],[],['cc -c lib.c -o lib.o']),
            Target('main',['main'],['main.c'],['lib'],['cc main.c lib.o -o main']),
        ])

    def test_command_block(self):
        targets = parse("""target docs outputs(docs/index.html docs/api.html) [files(src/a.py  src/b.py) targets()] {
            mkdir -p docs

            make-docs --out docs src/a.py src/b.py
        }""")
        target = targets[0]
        self.assertEqual(target.outputs,('docs/index.html','docs/api.html'))
        self.assertEqual(list(target.inputs),['src/a.py','src/b.py'])
        self.assertEqual(target.recipe,('mkdir -p docs','make-docs --out docs src/a.py src/b.py'))

    def test_outputs_can_be_left_out(self):
        target, = parse('target all [files() targets(lib, main)] {\n echo done\n}')
        self.assertTrue(target.phony)
        self.assertEqual(list(target.dependencies),['lib','main'])

    def test_empty_brackets_and_block(self):
        target, = parse('target nothing []{}')
        self.assertEqual(target,Target('nothing'))

    def test_target_list_spacing(self):
        target, = parse('target a [targets( b ,c,  d )] { true }')
        self.assertEqual(list(target.dependencies),['b','c','d'])

    def test_empty_file(self):
        self.assertEqual(parse(''),[])
        self.assertEqual(parse('  \n\n  '),[])

    def test_example_file(self):
        fpath = os.path.join(os.path.dirname(__file__),'example.msb')
        targets = parse_file(fpath)
        self.assertEqual([target.name for target in targets],['lib','main','test','all'])
        mk = Makefile(targets)
        self.assertEqual(mk.get_targets(),targets)
        self.assertEqual(mk.graph.build_order('all'),['lib','main','test','all'])


class TestParseErrors(unittest.TestCase):

    def assertParseError(self,text,lineno,fragment):
        with self.assertRaises(ParseError) as cm:
            parse(text)
        self.assertEqual(cm.exception.lineno,lineno)
        self.assertIn(fragment,str(cm.exception))

    def test_not_a_target(self):
        self.assertParseError('rule a [] {}',1,"expected 'target'")

    def test_bad_name(self):
        self.assertParseError('target my-lib [] {}',1,"expected '['")

    def test_missing_brackets(self):
        self.assertParseError('\n\ntarget a files(a.c) { true }',3,"expected '['")

    def test_unterminated_command_block(self):
        self.assertParseError('target a [] {\n cc a.c\n',1,'unterminated command block')

    def test_unterminated_file_list(self):
        self.assertParseError('target a [files(a.c b.c] { true }',1,'a file path')

    def test_non_alphanumeric_dependency(self):
        self.assertParseError('target a [targets(b.o)] { true }',1,'alphanumeric')

    def test_missing_comma(self):
        self.assertParseError('target a [targets(b c)] { true }',1,"expected ','")


if __name__ == '__main__':
    unittest.main()
