"""Domain models for the document Q&A pipeline.

Re-exports every public symbol so imports like
``from docqa.core.models import InteractionRecord`` work.
"""

from .constants import *  # noqa: F401, F403
from .inputs import *  # noqa: F401, F403
from .records import *  # noqa: F401, F403
from .session import *  # noqa: F401, F403
