# handler.py
"""AWS Lambda entry point.

API Gateway events are translated to ASGI calls by Mangum. Tables are
created when ``app.main`` is imported, so the ASGI lifespan is not needed.
"""

from mangum import Mangum
from app.main import app

handler = Mangum(app, lifespan="off")
