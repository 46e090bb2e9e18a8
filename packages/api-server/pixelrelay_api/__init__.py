"""
PixelRelay API - HTTP entry point for the purchase relay.

Receives purchase events from spreadsheet scripts and automation tools
and forwards them to the Meta Conversions API.

Usage:
    # Via CLI
    pixelrelay-api

    # Via Python
    from pixelrelay_api.app import create_app
    app = create_app()

    # Via uvicorn
    uvicorn --factory pixelrelay_api.app:create_app
"""

__version__ = "0.1.0"
