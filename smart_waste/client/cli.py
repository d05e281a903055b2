"""
Command line front end for the capture client.

Usage:
  smart-waste-client classify PHOTO.jpg [--source camera|gallery] [--no-camera]
  smart-waste-client items
  smart-waste-client categories
  smart-waste-client health
"""

import argparse
import sys
from typing import List, Optional

from .api_client import ApiError, WasteApiClient
from .config import get_client_settings
from .images import SOURCES
from .session import CameraUnavailableError, CaptureSession, render_result


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="smart-waste-client", description="Waste Classifier client")
    parser.add_argument("--api", default=None, help="API base URL (default: WASTE_CLIENT_API_BASE_URL)")
    sub = parser.add_subparsers(dest="command", required=True)

    classify = sub.add_parser("classify", help="Upload a photo and show its classification")
    classify.add_argument("path", help="Image file")
    classify.add_argument("--source", choices=SOURCES, default="gallery", help="How the photo was obtained")
    classify.add_argument(
        "--no-camera", action="store_true", help="Behave as if camera permission was denied"
    )

    sub.add_parser("items", help="List stored waste items")
    sub.add_parser("categories", help="List waste categories")
    sub.add_parser("health", help="Check that the server is up")
    return parser


def _classify(api: WasteApiClient, args: argparse.Namespace) -> int:
    session = CaptureSession(api, camera_available=not args.no_camera)
    print("Classifying waste...")
    try:
        result = session.submit(args.path, source=args.source)
    except CameraUnavailableError:
        print("Camera permission not granted. Pick a photo from the gallery instead.", file=sys.stderr)
        return 2
    if result is None:
        print(session.alert, file=sys.stderr)
        return 1
    print(render_result(result))
    return 0


# PUBLIC_INTERFACE
def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_client_settings()
    if args.api:
        settings = settings.model_copy(update={"API_BASE_URL": args.api})

    with WasteApiClient(settings=settings) as api:
        if args.command == "classify":
            return _classify(api, args)
        try:
            if args.command == "health":
                status = api.health()
                print(f"{status['status']}: {status['message']}")
            elif args.command == "items":
                for item in api.list_waste_items():
                    print(f"#{item.id}  {item.timestamp:%Y-%m-%d %H:%M:%S}  {item.category}  ({item.confidence})")
            elif args.command == "categories":
                for category in api.list_categories():
                    print(f"{category.name}: {category.recycling_guidelines or ''}")
        except ApiError as exc:
            print(f"Error: {exc.message}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
