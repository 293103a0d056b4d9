"""Row and source-set type aliases."""

from collections.abc import Mapping, Sequence
from typing import Any

Row = dict[str, Any]
SourceSet = Mapping[str, Sequence[Row]]

# Reserved field carrying the originating source name of a flattened row
GROUP_FIELD = "__group"
