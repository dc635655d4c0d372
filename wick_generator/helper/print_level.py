from enum import IntEnum


class PrintLevel(IntEnum):
    """ Amount of diagnostic output printed while contracting operators. """
    No = 0
    Summary = 1
    Basic = 2
    Detailed = 3
    All = 4
