"""Infrastructure module.

This module contains the configuration infrastructure used to bootstrap
Hadoop client settings:
- Application settings (YAML)
- Configuration store and XML resource loading
- Cluster configuration patching
"""

from infrastructure.config import *
