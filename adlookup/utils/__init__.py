"""Small, side-effect free helpers.

Keep this package dependency-light to avoid circular imports.
"""

from .dn import dn_first_component_value, dn_parent, split_dn  # noqa: F401
from .strings import left, right  # noqa: F401
