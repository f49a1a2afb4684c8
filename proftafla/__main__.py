import argparse
import asyncio
import logging
import sys
from dataclasses import asdict

import orjson

from proftafla.config import settings
from proftafla.exceptions import ProftaflaError
from proftafla.schedule import ExamSchedule

logger = logging.getLogger(__name__)


def _dump(data) -> None:
    sys.stdout.write(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode() + "\n")


async def run(command: str, slug: str | None = None) -> int:
    async with ExamSchedule() as schedule:
        match command:
            case "departments":
                _dump([asdict(department) for department in schedule.departments()])
            case "tests":
                groups = await schedule.get_tests(slug)
                if groups is None:
                    sys.stderr.write(f"Подразделение '{slug}' не найдено\n")
                    return 1
                _dump([group.model_dump() for group in groups])
            case "stats":
                stats = await schedule.get_stats()
                _dump(stats.model_dump(by_alias=True))
            case "clear-cache":
                cleared = await schedule.clear_cache()
                _dump(cleared)
                return 0 if cleared else 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="proftafla", description="Расписание экзаменов Ugla: кеш и статистика.")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("departments", help="Список подразделений")
    tests_parser = subparsers.add_parser("tests", help="Экзамены подразделения")
    tests_parser.add_argument("slug")
    subparsers.add_parser("stats", help="Статистика по всем подразделениям")
    subparsers.add_parser("clear-cache", help="Очистить кеш")
    return parser


def main(argv=None) -> int:
    logging.basicConfig(level=getattr(logging, settings.log_level), stream=sys.stderr)
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args.command, getattr(args, "slug", None)))
    except ProftaflaError as e:
        logger.error(f"Команда {args.command} завершилась ошибкой: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
