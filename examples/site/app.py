"""Site: a small file-system-routed site.

Demonstrates every resolution tier:

- ``/css/site.css``      static asset from ``public/``
- ``/about``             direct view ``views/about.html``
- ``/users/{id}``        route view ``views/users/{id}.py`` (Python script view)
- ``/posts/{slug}``      route view ``views/posts/{slug}.jinja`` with route data
- anything else          fallback view ``views/index.jinja``

Run with any ASGI server:
    uvicorn app:app
"""

from pathlib import Path

from clover import Resolver, ViewServer

HERE = Path(__file__).parent

resolver = (
    Resolver({"site": "Clover Example"})
    .set_view_root(HERE / "views")
    .set_asset_root(HERE / "public")
    .register_route("/users/{id}")
    .register_route("/posts/{slug}", {"section": "Blog"})
    .set_fallback(True, "/index")
)

app = ViewServer(resolver)
