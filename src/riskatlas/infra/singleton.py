import functools


def singleton(func):
    """
    Decorator for a zero-argument factory.
    The first result is stashed on the wrapper and returned on every
    later call; ``wrapper.cache_clear()`` drops it (used by tests).
    """

    @functools.wraps(func)
    def wrapper():
        if not hasattr(wrapper, "_instance"):
            wrapper._instance = func()
        return wrapper._instance

    def cache_clear():
        if hasattr(wrapper, "_instance"):
            del wrapper._instance

    wrapper.cache_clear = cache_clear
    return wrapper
