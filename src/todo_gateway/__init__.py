"""Todo Gateway

A GraphQL endpoint for todo items. The gateway declares its own schema and forwards
the one field it serves to a remote Prisma service, re-executing the client's
selection against the remote schema.

+--------+  POST /graphql  +--------------+  HTTPS + JWT  +----------------+
|        |  ============>  |              |  ==========>  |                |
| client |                 | todo gateway |               | Prisma service |
|        |  <============  |              |  <==========  |                |
+--------+   data/errors   +--------------+   data/errors +----------------+

Every request gets its own context holding a freshly built Prisma binding.
"""

import importlib.metadata

__version__ = importlib.metadata.version("todo-gateway")
