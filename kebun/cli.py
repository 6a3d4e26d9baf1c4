"""Kebun CLI — main entry point for `kebun`."""


def main():
    """Start the Kebun API server."""
    import uvicorn
    from kebun.core.config import get_settings

    settings = get_settings()

    print("🌱 Kebun — plant care tracker")
    print(f"   Starting on http://{settings.host}:{settings.port}")
    print(f"   API Docs:  http://{settings.host}:{settings.port}/docs")
    print(f"   Backends:  pg{', sb' if settings.rest_enabled else ''}")
    print("")

    uvicorn.run(
        "kebun.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
