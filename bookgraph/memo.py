_unset = object()


def memoize(func):
    if not callable(func):
        func = lambdaize(func)

    cache = [_unset]

    def get():
        if cache[0] is _unset:
            cache[0] = func()

        return cache[0]

    return get


def lambdaize(value):
    return lambda: value
