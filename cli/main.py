"""
CLI Application Logic

Provides an interactive command-line interface for VibeMaster.
"""
import json
import logging
from typing import Optional

from dotenv import load_dotenv

from vibemaster import VibeMaster
from vibemaster.tools import get_tools

logger = logging.getLogger(__name__)


async def interactive_session(system: VibeMaster) -> None:
    """
    Run an interactive session against an initialized VibeMaster.

    Args:
        system: Initialized VibeMaster instance
    """
    if not system.is_initialized():
        logger.error("System is not initialized. Cannot start interactive session.")
        return

    logger.info("\n%s", "=" * 70)
    logger.info("🎭 VIBEMASTER")
    logger.info("%s", "=" * 70)
    logger.info("Commands: 'exit' to quit\n")

    while True:
        try:
            step = input("🔄 Step (🎭 analyze, 🧠 orchestrate, 🧭 route, 📚 smart_context, 🔌 providers, 🔍 stack, 🧰 tools, 👋 exit): ").strip().lower()

            if step == "analyze":
                text = input("\n✍️  Text: ").strip()
                if not text:
                    continue
                result = await system.analyze(text)
                logger.info("\n🎭 %s", json.dumps(result.to_serializable(), indent=2))
                continue

            if step == "orchestrate":
                query = input("\n🤔 Your request: ").strip()
                if not query:
                    continue
                result = await system.orchestrate(query)
                logger.info("\n\n💡 %s", result.answer)
                continue

            if step == "route":
                query = input("\n🤔 Your request: ").strip()
                plan = system.route(query)
                for entry in plan:
                    logger.info("🧭 %d %s (%s)", entry.priority, entry.provider.name, entry.reason)
                if not plan:
                    logger.info("🧭 No installed provider matches this request.")
                continue

            if step == "smart_context":
                topic = input("\n📚 Topic: ").strip()
                if not topic:
                    continue
                result = await system.smart_context(topic)
                logger.info("\n\n💡 %s", result.answer)
                continue

            if step == "providers":
                for provider in system.list_providers():
                    marker = "✓" if provider.installed else "(not installed)"
                    logger.info("🔌 %s: %s %s", provider.name, ", ".join(provider.capabilities), marker)
                continue

            if step == "stack":
                path = input("📁 Project path (or press Enter for the current project): ").strip()
                context = system.detect_stack(path or None)
                logger.info("\n🔍 %s", json.dumps(context.to_serializable(), indent=2))
                continue

            if step == "tools":
                for tool in get_tools(system):
                    logger.info("🧰 %s: %s", tool.name, tool.description.splitlines()[0])
                continue

            if step == 'exit':
                logger.info("\n👋 Goodbye!")
                break

            logger.warning("❓ Unknown command: %s", step)
        except KeyboardInterrupt:
            logger.info("\n👋 Goodbye!")
            break
        except Exception as e:
            logger.exception("❌ Error during step: %s", e)


async def run_cli(
    project_path: Optional[str] = None,
    interactive: bool = True
) -> VibeMaster:
    """
    Run the CLI application.

    Args:
        project_path: Project to scan (defaults to VIBEMASTER_PROJECT_PATH or cwd)
        interactive: Whether to start interactive session

    Returns:
        Initialized VibeMaster instance
    """
    logger.info("=" * 70)
    logger.info("🚀 VIBEMASTER CLI")
    logger.info("=" * 70)

    logger.info("⚙️  Initializing system...")
    system = VibeMaster()
    context = await system.initialize(project_path)
    logger.info(
        "📦 Stack: %s (%s)",
        ", ".join(context.stack.languages) or "unknown",
        context.stack.package_manager,
    )

    if interactive and system.is_initialized():
        try:
            await interactive_session(system)
        except Exception as e:
            logger.error("Interactive session ended: %s", e)

    return system


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("vibemaster").setLevel(level)


async def main() -> None:
    """Default CLI entry point with standard configuration."""
    configure_logging()
    load_dotenv()
    await run_cli(interactive=True)
