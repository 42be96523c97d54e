"""Start the eligibility API server."""

import uvicorn

from loan_eligibility.config.settings import load_settings


def main():
    settings = load_settings()
    uvicorn.run(
        "loan_eligibility.serving.api:create_app",
        factory=True,
        host=settings.serving.host,
        port=settings.serving.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
