"""
Result types shared by the validation engine.
"""
from typing import Dict, Optional, Tuple, Union

# A location inside a value: field names for maps, indices for lists.
PathSegment = Union[str, int]
Path = Tuple[PathSegment, ...]

# One entry per offending location of a composite value.
ErrorMap = Dict[Path, str]

# None means the value passed.
Result = Optional[Union[str, ErrorMap]]
