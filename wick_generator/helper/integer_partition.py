def integer_partition(n, max_parts=None):
    """
    Partition an integer n to small components using ZS1 algorithm.
    see Intern. J. Computer Math., Vol. 70. pp. 319 by A. Zoghbiu and I. Stojmenovic

    Partitions are generated in reverse lexicographic order, starting from [n], each one sorted descending.
    :param n: the integer to be partitioned
    :param max_parts: skip partitions with more than max_parts components if given
    :return: a generator of lists of integers
    """
    if n < 1:
        return

    if max_parts is None or max_parts >= 1:
        yield [n]

    x = [1] * n
    x[0] = n
    m, h = 1, 1
    while x[0] != 1:
        if x[h - 1] == 2:
            m += 1
            x[h - 1] = 1
            h -= 1
        else:
            r = x[h - 1] - 1
            t = m - h + 1
            x[h - 1] = r
            while t >= r:
                h += 1
                x[h - 1] = r
                t -= r
            if t == 0:
                m = h
            else:
                m = h + 1
                if t > 1:
                    h += 1
                    x[h - 1] = t
        if max_parts is None or m <= max_parts:
            yield x[:m]
