import math


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0
