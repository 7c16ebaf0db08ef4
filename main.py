import uvicorn

from catalog_api.api import create_app
from catalog_api.config import get_config


def main():
    """Run the Catalog API with the configured host and port.

    Equivalent to `uvicorn --factory catalog_api.api:create_app`.
    """
    config = get_config()
    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        proxy_headers=True,
        forwarded_allow_ips=config.server.forwarded_allow_ips,
    )


if __name__ == "__main__":
    main()
