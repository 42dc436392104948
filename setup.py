from setuptools import setup

setup(name='msb',
        version='0.1.0',
        description='A minimal build tool that reruns only the targets whose outputs are out of date',
        classifiers=[
          "Environment :: Console",
          "Programming Language :: Python :: 3",
          "Development Status :: 3 - Alpha",
          "Intended Audience :: Developers",
          "Natural Language :: English",
          "Operating System :: POSIX",
          "Topic :: Software Development :: Build Tools"
           ],
        keywords='make build',
        packages=['msb'],
        package_data={'msb':['example.msb']},
        python_requires='>=3.7',
        install_requires=['ordered-set'],
        extras_require={'test':['sh']},
        entry_points={'console_scripts':['msb=msb.makefile:main']},
        long_description="""\
msb reads a build file of target declarations and rebuilds only what is out of
date, in dependency order. A target names its outputs, the files it reads, the
targets it depends on and the shell commands that produce it::

    target lib outputs(lib.o) [files(lib.c) targets()] {
        cc -c lib.c -o lib.o
    }

    target main outputs(main) [files(main.c) targets(lib)] {
        cc main.c lib.o -o main
    }

    target all [targets(main)] {
        echo done
    }

A target is rebuilt when one of its outputs is missing, when one of its input
files is newer than its oldest output, or when a target it depends on was
rebuilt. Targets without outputs are phony and run every time. Nothing is
stored between runs: the outputs' modification times are the only record.

Duplicate target names, dependencies on unknown targets and dependency cycles
are reported before any command runs. The first command to fail stops the
build.

Command line::

    msb [build.msb] [main] [--print-targets] [-n/--dry-run] [-j JOBS]

or from python::

    from msb import Makefile

    mk = Makefile.from_file('build.msb')
    print(mk.calc_build('main')) # what would run
    result = mk.build_target('main')
    if not result:
        print(result.failed_target, result.exit_code)
        """,
        )
