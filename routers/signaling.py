from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from fastapi.responses import PlainTextResponse

from connection import RelayConnection
from constants import ROOM_QUERY_PARAM
from logging_config import get_logger

logger = get_logger(__name__)

signaling_router = APIRouter(tags=["signaling"])


@signaling_router.websocket("/")
async def relay_endpoint(websocket: WebSocket):
    """Relay websocket.

    The first connection for ``?room=<id>`` becomes that room's host and
    receives every ``message`` signal addressed to the room until it closes.
    """
    signal_router = websocket.app.state.signal_router
    lifecycle = websocket.app.state.lifecycle

    connection = RelayConnection(websocket, websocket.query_params.get(ROOM_QUERY_PARAM, ""))
    await connection.accept()
    try:
        await lifecycle.on_open(connection)

        message_count = 0
        while True:
            event = await websocket.receive()
            if event["type"] == "websocket.disconnect":
                logger.debug(f"Connection {connection.connection_id} disconnected with code {event.get('code')}")
                break

            payload = event.get("text")
            if payload is None:
                payload = event.get("bytes")
            if payload is None:
                continue

            message_count += 1
            logger.debug(f"Received message #{message_count} from connection {connection.connection_id}")
            await signal_router.route(payload)
    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected for connection {connection.connection_id}")
    except Exception as e:
        logger.error(f"Error handling connection {connection.connection_id}: {e}", exc_info=True)
    finally:
        await connection.close()
        await lifecycle.on_close(connection)


@signaling_router.get("/", include_in_schema=False)
async def reject_plain_request():
    return PlainTextResponse("Bad Request", status_code=400)
