# timer grabbed from
# https://stackoverflow.com/questions/7370801/measure-time-elapsed-in-python
from timeit import default_timer as timer


class Timer:

    def __init__(self, msg, fmt="%0.3g", verbose=True):
        """
        Context manager that measures the wall time of a block.
        :param msg: the message printed along with the timing
        :param fmt: the format of the elapsed time
        :param verbose: print the timing on exit if True
        """
        self.msg = msg
        self.fmt = fmt
        self.verbose = verbose
        self.time = 0.0

    def __enter__(self):
        self.start = timer()
        return self

    def __exit__(self, *args):
        t = timer() - self.start
        if self.verbose:
            print(("    %s : " + self.fmt + " seconds") % (self.msg, t))
        self.time = t
