from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr, StringConstraints

NonEmptyStr = Annotated[StrictStr, StringConstraints(strip_whitespace=True, min_length=1)]
ListItem = Union[StrictStr, StrictInt, StrictFloat]


class FrontMatter(BaseModel):
    """Shape of the optional post keys; ``title``/``date`` have their own checks."""

    model_config = ConfigDict(frozen=True, extra="allow")

    author: Optional[NonEmptyStr] = None
    tags: Optional[Union[StrictStr, List[ListItem]]] = None
    reviewers: Optional[Union[StrictStr, List[ListItem]]] = None
