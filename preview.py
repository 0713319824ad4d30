"""카드 PC 미리보기 — config.json 템플릿을 렌더링해 PNG 파일로 저장."""

import asyncio
import logging

from cardmaker import CardMaker
from config import load_config

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(message)s")
logging.getLogger("PIL").setLevel(logging.WARNING)

OUTPUT = "card.png"


async def main():
    config = load_config()
    maker = await CardMaker.create(config)

    report = maker.last_report
    for failure in report.failures:
        logging.error("실패: %s (%s)", failure.label, failure.error)

    path = maker.save_image(OUTPUT)
    print(f"저장됨: {path} ({config['width']}x{config['height']})")


if __name__ == "__main__":
    asyncio.run(main())
