"""Console entry point for the livestock monitoring toolkit."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Sequence

from ..application.analyze_image import summarize_prediction
from ..application.detection_history import only_behavior, summarize_history
from ..domain.events import ERROR_TOPIC, OVERLAY_TOPIC, ErrorRaised, OverlayRendered
from ..domain.vision.behavior import Behavior
from ..domain.vision.detection import DetectionBatch, FrameSize
from ..infrastructure.image_io import blank_frame, compose, save_image
from ..infrastructure.timer_hosts import AsyncioTimerHost
from ..shared.errors import ApplicationError
from .container import ApplicationContainer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="livestock-monitor",
        description="Livestock behaviour detection overlays and inference service client",
    )
    parser.add_argument("--api-url", default=None, help="Override the inference service base URL.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("health", help="Probe the inference service.")

    analyze = subparsers.add_parser("analyze", help="Analyse an image and draw the detections.")
    analyze.add_argument("image", type=Path)
    analyze.add_argument("--output", type=Path, default=None, help="Where to save the annotated image.")

    history = subparsers.add_parser("history", help="List stored detections.")
    history.add_argument("--behavior", default=None, help="Only list detections of this behaviour.")

    delete = subparsers.add_parser("delete", help="Delete a stored detection.")
    delete.add_argument("detection_id")

    render = subparsers.add_parser("render-camera", help="Render a camera's live overlay to an image.")
    render.add_argument("camera")
    render.add_argument("--output", type=Path, required=True)
    render.add_argument("--width", type=int, default=None, help="Surface width (defaults to the reference).")
    render.add_argument("--height", type=int, default=None, help="Surface height (defaults to the reference).")

    watch = subparsers.add_parser("watch", help="Stream a camera's overlay headlessly for a while.")
    watch.add_argument("camera")
    watch.add_argument("--duration", type=float, default=1.0, help="Seconds to keep streaming.")
    watch.add_argument("--width", type=int, default=None, help="Surface width (defaults to the reference).")
    watch.add_argument("--height", type=int, default=None, help="Surface height (defaults to the reference).")

    live = subparsers.add_parser("live", help="Open the live camera viewer.")
    live.add_argument("--video-root", type=Path, default=Path("."), help="Directory holding camera videos.")
    return parser


def format_batch(batch: DetectionBatch) -> list[str]:
    lines = []
    for index, record in enumerate(batch, start=1):
        x, y, width, height = (round(value) for value in record.bbox.as_tuple())
        lines.append(
            f"{index:>3}. id={record.id} {record.behavior.display_name:<13} "
            f"{record.confidence_text:>6}  x:{x}, y:{y}, w:{width}, h:{height}"
        )
    return lines


def _print_error(event: ErrorRaised) -> None:
    print(f"error: {event.message}", file=sys.stderr)


def _health(container: ApplicationContainer) -> int:
    health = asyncio.run(container.check_health().execute())
    print(health.describe())
    return 0


def _analyze(container: ApplicationContainer, image: Path, output: Path | None) -> int:
    controller = container.image_analysis()
    controller.select_image(image.name, image.read_bytes())
    controller.image_decoded()
    batch = asyncio.run(controller.analyze())
    if batch is None:
        return 1
    summary = summarize_prediction(batch)
    print(f"{image.name}: {summary.total} detection(s), average confidence {summary.average_confidence * 100:.1f}%")
    for line in format_batch(batch):
        print(line)
    if output is not None:
        save_image(output, controller.annotated_image())
        print(f"annotated image written to {output}")
    return 0


def _history(container: ApplicationContainer, behavior_name: str | None) -> int:
    behavior = None
    if behavior_name is not None:
        behavior = Behavior.from_name(behavior_name)
        if behavior is Behavior.UNKNOWN and behavior_name.strip().lower() != "unknown":
            print(f"error: unknown behaviour {behavior_name}", file=sys.stderr)
            return 2
    batch = asyncio.run(container.list_detections().execute())
    if batch is None:
        return 1
    if behavior is not None:
        batch = only_behavior(batch, behavior)
    for line in format_batch(batch):
        print(line)
    summary = summarize_history(batch)
    print(f"Total detections: {summary.total}")
    for listed, count in summary.per_behavior.items():
        print(f"  {listed.display_name:<13} {count}")
    return 0


def _delete(container: ApplicationContainer, detection_id: str) -> int:
    deleted = asyncio.run(container.delete_detection().execute(detection_id))
    if deleted:
        print(f"deleted {detection_id}")
    return 0 if deleted else 1


def _render_camera(
    container: ApplicationContainer,
    camera_id: str,
    output: Path,
    width: int | None,
    height: int | None,
) -> int:
    settings = container.settings()
    source = container.live_source()
    if source.camera(camera_id) is None:
        print(f"error: unknown camera {camera_id}", file=sys.stderr)
        return 2
    reference = settings.reference_frame
    size = FrameSize(width or reference.width, height or reference.height)
    surface = container.surface()
    annotations = container.renderer().render(surface, source.batch_for(camera_id), size, reference=reference)
    if annotations is None:
        print("error: surface size is not usable", file=sys.stderr)
        return 1
    save_image(output, compose(blank_frame(size), surface.snapshot()))
    for annotation in annotations:
        print(f"{annotation.label} box={annotation.box}")
    return 0


def _watch(
    container: ApplicationContainer,
    camera_id: str,
    duration: float,
    width: int | None,
    height: int | None,
) -> int:
    if container.live_source().camera(camera_id) is None:
        print(f"error: unknown camera {camera_id}", file=sys.stderr)
        return 2
    reference = container.settings().reference_frame
    size = FrameSize(width or reference.width, height or reference.height)
    bus = container.bus()

    def report(event: OverlayRendered) -> None:
        print(f"rendered {event.detections} detection(s) for {event.source}")

    async def stream() -> None:
        controller = container.live_feed(host=AsyncioTimerHost(), content_probe=lambda: size)
        controller.select_camera(camera_id)
        bus.subscribe(OVERLAY_TOPIC, report)
        controller.start_stream()
        try:
            await asyncio.sleep(duration)
        finally:
            controller.dispose()
            bus.unsubscribe(OVERLAY_TOPIC, report)

    asyncio.run(stream())
    return 0


def _live(container: ApplicationContainer, video_root: Path) -> int:
    import tkinter as tk

    from ..presentation.live_viewer import LiveViewerApp

    LiveViewerApp(tk.Tk(), container, video_root).run()
    return 0


def main(argv: Sequence[str] | None = None, container: ApplicationContainer | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    container = container or ApplicationContainer()
    if args.api_url:
        container.api_client.add_kwargs(base_url=args.api_url)
    container.init_resources()
    container.bus().subscribe(ERROR_TOPIC, _print_error)
    logger = container.logger()
    logger.info("app.started", command=args.command)

    try:
        if args.command == "health":
            return _health(container)
        if args.command == "analyze":
            return _analyze(container, args.image, args.output)
        if args.command == "history":
            return _history(container, args.behavior)
        if args.command == "delete":
            return _delete(container, args.detection_id)
        if args.command == "render-camera":
            return _render_camera(container, args.camera, args.output, args.width, args.height)
        if args.command == "watch":
            return _watch(container, args.camera, args.duration, args.width, args.height)
        if args.command == "live":
            return _live(container, args.video_root)
    except (ApplicationError, OSError) as exc:
        logger.error("app.failed", command=args.command, error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        container.bus().unsubscribe(ERROR_TOPIC, _print_error)
        container.shutdown_resources()
    parser.error(f"Unknown command {args.command}")
    return 2


def run() -> None:  # pragma: no cover - console script entry point
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    run()
