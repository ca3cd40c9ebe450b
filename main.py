#!/usr/bin/env python3
"""
Veo Studio - Main Entry Point

Generates a video with Veo from a text prompt and an optional first frame.

Usage:
    # Text to video
    python main.py generate --prompt "A neon hologram of a cat driving at top speed"

    # Image to video, portrait, 8 seconds
    python main.py generate --prompt "The statue turns its head" --image statue.png \\
        --duration 8 --aspect-ratio 9:16

    # Check configuration
    python main.py check
"""

import argparse
import asyncio
import logging
import sys

from core.config import get_config
from services.video_generation import AspectRatio

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("veostudio")


async def generate_video(args: argparse.Namespace) -> int:
    """Run one generation through the console host. Returns the exit code."""
    from cli.console_host import ConsoleFormHost
    from services.video_generation import (
        GenerationOrchestrator,
        InputCollector,
        StudioSession,
        VeoClient,
    )

    config = get_config()
    if args.model:
        config.models.video_model = args.model
    if args.count:
        config.models.number_of_videos = args.count
    if args.max_polls:
        config.polling.max_polls = args.max_polls
    if args.timeout:
        config.polling.timeout_seconds = args.timeout

    collector = InputCollector(
        duration_seconds=config.inputs.duration_seconds,
        aspect_ratio=config.inputs.aspect_ratio,
    )
    collector.set_prompt(args.prompt)
    if args.duration is not None:
        collector.set_duration(args.duration)
    if args.aspect_ratio:
        collector.set_aspect_ratio(args.aspect_ratio)
    if args.image:
        try:
            collector.set_image_file(args.image)
        except OSError as e:
            logger.error(f"Cannot read image {args.image}: {e}")
            return 1

    host = ConsoleFormHost(output_dir=args.output_dir or config.output.output_dir)
    client = VeoClient(config=config)
    orchestrator = GenerationOrchestrator(client, sink=host, config=config)
    session = StudioSession(host, collector, orchestrator)

    if args.ask_key or not config.api.google_api_key:
        session.select_api_key()

    logger.info(f"Model: {config.models.video_model}")
    logger.info(f"Prompt: {args.prompt}")
    if args.image:
        logger.info(f"Source image: {args.image}")

    try:
        ok = await session.generate()
    finally:
        await client.close()

    if ok and session.last_result:
        result = session.last_result
        logger.info(
            f"Operation {result.operation_name} finished after {result.polls} status checks "
            f"({result.processing_time_seconds:.1f}s)"
        )
    return 0 if ok else 1


def check_config() -> int:
    config = get_config()
    issues = config.validate()
    for issue in issues:
        logger.warning(issue)
    if not issues:
        logger.info(f"Configuration OK (model {config.models.video_model})")
    return 1 if issues else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Veo Studio - generate videos from a prompt and an optional image",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    gen_parser = subparsers.add_parser("generate", help="Generate a video")
    gen_parser.add_argument("--prompt", "-p", default="", help="Text prompt")
    gen_parser.add_argument("--image", "-i", help="Source image (first frame) file")
    gen_parser.add_argument("--duration", "-d", help="Duration in seconds")
    gen_parser.add_argument(
        "--aspect-ratio", "-a",
        choices=[ratio.value for ratio in AspectRatio],
        help="Output aspect ratio",
    )
    gen_parser.add_argument("--model", "-m", help="Veo model id")
    gen_parser.add_argument("--count", type=int, help="Number of videos to generate")
    gen_parser.add_argument("--output-dir", "-o", help="Directory for downloaded videos")
    gen_parser.add_argument("--max-polls", type=int, help="Give up after this many status checks")
    gen_parser.add_argument("--timeout", type=float, help="Give up after this many seconds of polling")
    gen_parser.add_argument("--ask-key", action="store_true", help="Prompt for the API key")

    subparsers.add_parser("check", help="Validate configuration")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "generate":
        try:
            return asyncio.run(generate_video(args))
        except KeyboardInterrupt:
            logger.info("Interrupted")
            return 130
    if args.command == "check":
        return check_config()

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
