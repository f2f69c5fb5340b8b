# Copyright 2017-present Kensho Technologies, LLC.
from .common import (  # noqa
    CompiledPath,
    CompiledReuse,
    CompiledRoute,
    Declaration,
)
from .finals import (  # noqa
    All,
    Expectation,
    Final,
    GetLimit,
    TagArray,
    TagValue,
    ToArray,
    ToValue,
)
from .paths import Morphism, Trail, Vertex  # noqa
