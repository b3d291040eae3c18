import logging
from factoryops.realtime.server import sio, MACHINES_NAMESPACE

logger = logging.getLogger(__name__)


@sio.on("connect", namespace=MACHINES_NAMESPACE)
async def connect(sid, environ, auth=None):
    logger.info("Machines client connected: %s", sid)


@sio.on("disconnect", namespace=MACHINES_NAMESPACE)
async def disconnect(sid, reason=None):
    logger.info("Machines client disconnected: %s", sid)
