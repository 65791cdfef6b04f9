"""
Entry points.

    python -m vision_assistant serve [--host 0.0.0.0] [--port 8000]
        Web UI + /api/analyze-image proxy + on-device assistant.

    python -m vision_assistant kiosk
        Keyboard-driven assistant: Enter taps, "r" reads the last result
        again, "q" quits. Set ANALYZER=http and PROXY_URL to use a remote proxy.
"""
import argparse
import logging

import uvicorn

from vision_assistant.config import get_settings
from vision_assistant.services.status_store import StatusStore


def serve(args):
    uvicorn.run("vision_assistant.web.app:create_app", factory=True,
                host=args.host, port=args.port, log_level=args.log_level)


def kiosk(args):
    from vision_assistant.adapters.camera.frame_grabber import FrameGrabber
    from vision_assistant.orchestrator.state_machine import TapStateMachine
    from vision_assistant.services.api import build_analyzer, build_camera, build_narrator, build_vision
    from vision_assistant.services.proxy import InferenceProxy

    settings = get_settings()
    status = StatusStore()
    proxy = None
    if settings.analyzer != "http":
        proxy = InferenceProxy(build_vision(settings, status), status)
    assistant = TapStateMachine(
        camera=build_camera(settings, status),
        grabber=FrameGrabber(status, jpeg_quality=settings.jpeg_quality),
        analyzer=build_analyzer(settings, status, proxy),
        narrator=build_narrator(settings, status),
        status_store=status,
    )

    assistant.welcome()
    try:
        while True:
            cmd = input(f"[{assistant.hint()}] > ").strip().lower()
            if cmd in ("q", "quit", "exit"):
                break
            if cmd == "r":
                assistant.read_again()
                continue
            out = assistant.tap()
            print(f"{out.action} -> {out.state.value}")
            if out.description:
                print(out.description)
    except (EOFError, KeyboardInterrupt):
        pass
    finally:
        assistant.shutdown()


def main(argv=None):
    parser = argparse.ArgumentParser(prog="vision_assistant")
    parser.add_argument("--log-level", default="info")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="run the web app")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)
    p_serve.set_defaults(func=serve)

    p_kiosk = sub.add_parser("kiosk", help="keyboard-driven assistant")
    p_kiosk.set_defaults(func=kiosk)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
