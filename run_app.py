import uvicorn

from ipcountry.config import settings
from ipcountry.logger import log_config


def main() -> None:
    """Run the FastAPI application with uvicorn.

    Forwarded headers are honoured when TRUST_PROXY is on, so the peer address
    seen by the app is the original client behind a proxy.
    """
    uvicorn.run(
        "ipcountry.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        proxy_headers=settings.trust_proxy,
        forwarded_allow_ips=settings.forwarded_allow_ips,
        log_config=log_config,
    )


if __name__ == "__main__":
    main()
