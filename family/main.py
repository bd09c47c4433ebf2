import socket

import uvicorn

from family.api.api_run import app
from family.utilities.config import APP_HOST, APP_PORT


def get_local_ip() -> str:
    """Return the LAN address other household devices can reach, or '127.0.0.1'.

    Connecting a UDP socket sends nothing; it only makes the OS pick the
    outgoing interface.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("8.8.8.8", 80))
        ip = str(s.getsockname()[0])
    except OSError:
        ip = "127.0.0.1"
    finally:
        s.close()
    return ip


def run():
    local_url = f"http://localhost:{APP_PORT}"
    local_ip = get_local_ip()
    print(f"Family dashboard running on {local_url} (Press CTRL+C to quit)")
    # Other devices in the household can use the LAN address
    if local_ip not in ("127.0.0.1", "localhost"):
        print(f"Accessible from other devices at: http://{local_ip}:{APP_PORT}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)


if __name__ == "__main__":
    run()
