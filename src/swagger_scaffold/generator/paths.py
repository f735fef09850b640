"""Path template normalization."""

from typing import NamedTuple

# Recognized HTTP verbs, in the order operations are read from a path item.
VERBS = ("get", "post", "put", "delete", "head", "options", "patch")


class NormalizedPath(NamedTuple):
    pathname: str
    segments: list[str]


def normalize(raw_path: str) -> NormalizedPath:
    """Strip empty segments from a path template.

    `/pets/{id}/` and `pets//{id}` both become `pets/{id}`. A path with
    no segments at all normalizes to the empty string.
    """
    segments = [segment for segment in raw_path.split("/") if segment]
    return NormalizedPath("/".join(segments), segments)
