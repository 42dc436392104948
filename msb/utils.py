from collections.abc import Iterable
import os

def checkseq(val):
    """replaces None with an empty tuple and wraps
    non-iterable values into a tuple too."""
    if not val: val = tuple()
    elif isinstance(val,str): val = (val,)
    elif not isinstance(val,Iterable): val = (val,)
    return val

def dedup(seq):
    """deduplicate a list while keeping the original order"""
    seen = set()
    seen_add = seen.add
    return [ x for x in seq if not (x in seen or seen_add(x))]

def get_mtime(fpath):
    """modification time of fpath in nanoseconds or None if it doesn't exist"""
    try:
        return os.stat(fpath).st_mtime_ns
    except FileNotFoundError:
        return None


class StatCache(object):
    """memoizes get_mtime for the lifetime of one build so that each path is
    only looked up once per evaluation pass."""
    
    def __init__(self):
        self.cache = {}
    
    def __call__(self,fpath):
        if fpath not in self.cache:
            self.cache[fpath] = get_mtime(fpath)
        return self.cache[fpath]
