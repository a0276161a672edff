"""nodeboard: live, in-place terminal dashboard for multi-node builds.

Shows which build node is working on which project/target while a build
engine runs, and prints a single completion line for each notable project.

  - Event-driven state tracker (node table, project timers, notability)
  - Erase-then-redraw console renderer that never scrolls the dashboard
  - 30 Hz background refresh with synchronous shutdown
  - ``NodeLogger`` facade that subscribes to any ``EventSource``
"""

__version__ = "0.1.0"
__description__ = "Live in-place terminal dashboard of build nodes"

from nodeboard.core.event_bus import EventBus
from nodeboard.node_logger import NodeLogger

__all__ = ["EventBus", "NodeLogger", "__version__"]
