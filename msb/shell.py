"""running recipe lines"""

import subprocess


def run(command_line,cwd=None):
    """runs command_line through the system shell, waits for it and returns
    its exit status. stdout and stderr go straight to ours."""
    return subprocess.call(command_line,shell=True,cwd=cwd)
