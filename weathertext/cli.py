"""CLI entry point for the text weather service."""

import argparse
import asyncio
import json
import logging
from dataclasses import asdict

from weathertext.bootstrap import build_handler
from weathertext.config.loader import get_config_value, load_config
from weathertext.ingest.location_parser import parse_location
from weathertext.models.location import NOT_A_LOCATION
from weathertext.services.message_handler import GUIDANCE_REPLY, MessageHandler

DEFAULT_SENDER = "cli"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weathertext",
        description="Short-range weather forecasts for text messages",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")

    sub = parser.add_subparsers(dest="command")

    # forecast
    fc_p = sub.add_parser("forecast", help="Forecast for coordinates or a three-word address")
    fc_p.add_argument("location", help='e.g. "51.5074,-0.1278" or "///filled.count.soap"')
    fc_p.add_argument("--provider", default=None, help="Preferred provider name")
    fc_p.add_argument("--raw", action="store_true", help="Print the normalized forecast as JSON")

    # providers
    sub.add_parser("providers", help="Show provider priority and availability")

    # serve
    serve_p = sub.add_parser("serve", help="Run the SMS webhook server")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Get a config value")
    get_p.add_argument("key", help="Dotted key, e.g. server.port")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "forecast":
        return asyncio.run(_cmd_forecast(build_handler(config), args))
    elif args.command == "providers":
        return asyncio.run(_cmd_providers(build_handler(config)))
    elif args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


async def _cmd_forecast(handler: MessageHandler, args) -> int:
    if args.provider:
        handler.preferred_provider = args.provider
    if not args.raw:
        reply = await handler.respond(DEFAULT_SENDER, args.location)
        print(reply.text)
        return 0 if reply.ok else 1

    try:
        coords = await parse_location(args.location, handler.resolver)
        if coords is NOT_A_LOCATION:
            print(GUIDANCE_REPLY)
            return 1
        name, forecast = await handler.manager.get_standardized_forecast(
            coords.lat, coords.lng, preferred=handler.preferred_provider
        )
    except Exception as e:
        print(f"Error: {e}")
        return 1
    print(json.dumps({"provider": name, **asdict(forecast)}, indent=2, ensure_ascii=False))
    return 0


async def _cmd_providers(handler: MessageHandler) -> int:
    manager = handler.manager
    availability = await manager.availability()
    for i, name in enumerate(manager.priority_order, start=1):
        status = "OK" if availability[name] else "UNAVAILABLE"
        print(f"{i}. {name}: {status}")
    print(f"Active provider: {manager.active_provider.name}")
    return 0


def _cmd_serve(config, args) -> int:
    import uvicorn

    from weathertext.server import create_app

    app = create_app(build_handler(config), dev_endpoints=config.server.dev_endpoints)
    uvicorn.run(
        app,
        host=args.host or config.server.host,
        port=args.port or config.server.port,
    )
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get key")
        return 1
