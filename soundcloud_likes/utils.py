import inspect

from fake_useragent import UserAgent


def get_default_kwargs(func):
    signature = inspect.signature(func)
    return {k: v.default for k, v in signature.parameters.items() if v.default is not inspect.Parameter.empty}


def generate_random_user_agent() -> str:
    return UserAgent().random


def chunk_list(list_: list, n: int):
    """Yield successive n-sized chunks from lst."""
    for i in range(0, len(list_), n):
        yield list_[i : i + n]
