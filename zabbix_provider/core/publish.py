# zabbix_provider/core/publish.py
"""Publish the Zabbix connection template into an application's config directory.

    python -m zabbix_provider.core.publish ./config
"""
import argparse
import logging
from pathlib import Path

from zabbix_provider.core.config import describe_options

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "zabbix.env"


def _format_default(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_template() -> str:
    lines = ["# Zabbix API connection settings", ""]
    for option in describe_options():
        lines.append(f"# {option.description}")
        if option.default is None:
            lines.append(f"# {option.env_var}=")
        else:
            lines.append(f"{option.env_var}={_format_default(option.default)}")
        lines.append("")
    return "\n".join(lines)


def publish_config(target_dir, filename: str = DEFAULT_FILENAME, force: bool = False) -> Path:
    target = Path(target_dir)
    target.mkdir(parents=True, exist_ok=True)
    path = target / filename
    if path.exists() and not force:
        raise FileExistsError(f"{path} already exists, pass force=True to overwrite")
    path.write_text(render_template(), encoding="utf-8")
    logger.info(f"Published Zabbix config template to {path}")
    return path


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Write the Zabbix config template")
    parser.add_argument("target_dir", nargs="?", default=".")
    parser.add_argument("--filename", default=DEFAULT_FILENAME)
    parser.add_argument("--force", action="store_true", help="overwrite an existing file")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")
    try:
        publish_config(args.target_dir, args.filename, args.force)
    except FileExistsError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
