# ABOUTME: Pydantic AI agent that writes a Japanese climate-insight narrative for one day of weather.
# ABOUTME: Builds aggregate statistics and the prompt, and converts every failure into fallback text.

import json
import logging
from collections.abc import Sequence
from datetime import date
from statistics import fmean

from pydantic_ai import Agent
from pydantic_ai.settings import ModelSettings

from weather_archive.config import NARRATIVE_MODEL
from weather_archive.models import HourlyRecord, Location, NarrativeStatistics

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "分析できる気象データがありません。別の日付または地点を選択してください。"
FAILURE_MESSAGE = "AIによる分析中にエラーが発生しました。しばらく経ってから再度お試しください。"
EMPTY_RESPONSE_MESSAGE = "AI分析の生成に失敗しました。"

MISSING_VALUE_TEXT = "データなし"

narrative_agent = Agent(
    NARRATIVE_MODEL,
    output_type=str,
    defer_model_check=True,
    model_settings=ModelSettings(temperature=0.7, top_p=0.95),
    system_prompt=(
        "あなたは日本の気候に詳しい気象解説者です。"
        "与えられた統計データだけを根拠に、一般の読者向けに親しみやすい日本語で解説してください。"
    ),
)

PROMPT_TEMPLATE = """\
以下の日本の地点の気象データについて、分かりやすく親しみやすい日本語で分析してください。

地点: {label} ({name})
座標: {latitude:.4f}, {longitude:.4f}
日付: {date}

統計データ (JSON、値が "{missing}" の項目はデータソースから提供されていません):
{payload}

分析のポイント:
1. この時期の平年値と比較してどのような特徴があるか（予測で構いません）。
2. この日の天気が人々の生活や服装にどのような影響を与えたと考えられるか。
3. 大気の安定度や紫外線など、注意すべき点があれば触れてください。
4. この地域ならではの気候特性についての豆知識。

回答は簡潔に、かつ興味深い内容にしてください。
"""


def _present(records: Sequence[HourlyRecord], field: str) -> list[float]:
    return [value for r in records if (value := getattr(r, field)) is not None]


def _agg(records: Sequence[HourlyRecord], field: str, fn) -> float | None:
    values = _present(records, field)
    return round(fn(values), 1) if values else None


def build_statistics(records: Sequence[HourlyRecord]) -> NarrativeStatistics:
    """Aggregate one day of hourly records; statistics with no input values stay None."""
    return NarrativeStatistics(
        max_temperature=_agg(records, "temperature_2m", max),
        min_temperature=_agg(records, "temperature_2m", min),
        mean_apparent_temperature=_agg(records, "apparent_temperature", fmean),
        total_precipitation=_agg(records, "precipitation", sum),
        max_precipitation_probability=_agg(records, "precipitation_probability", max),
        mean_relative_humidity=_agg(records, "relative_humidity_2m", fmean),
        mean_surface_pressure=_agg(records, "surface_pressure", fmean),
        min_visibility=_agg(records, "visibility", min),
        mean_cloud_cover=_agg(records, "cloud_cover", fmean),
        max_wind_speed=_agg(records, "wind_speed_10m", max),
        max_wind_gusts=_agg(records, "wind_gusts_10m", max),
        total_snowfall=_agg(records, "snowfall", sum),
        max_snow_depth=_agg(records, "snow_depth", max),
        max_uv_index=_agg(records, "uv_index", max),
        max_cape=_agg(records, "cape", max),
    )


def build_prompt(location: Location, day: date, statistics: NarrativeStatistics) -> str:
    """Embed the serialised statistics in the fixed instruction template."""
    payload = {key: MISSING_VALUE_TEXT if value is None else value for key, value in statistics.model_dump().items()}
    return PROMPT_TEMPLATE.format(
        label=location.label,
        name=location.name,
        latitude=location.coordinate.latitude,
        longitude=location.coordinate.longitude,
        date=day.isoformat(),
        missing=MISSING_VALUE_TEXT,
        payload=json.dumps(payload, ensure_ascii=False, indent=2),
    )


async def _generate(prompt: str) -> str:
    result = await narrative_agent.run(prompt)
    return result.output


async def narrate(location: Location, day: date, records: Sequence[HourlyRecord]) -> str:
    """Return a narrative for the day's weather, or a fallback message. Never raises."""
    if not records:
        return NO_DATA_MESSAGE

    prompt = build_prompt(location, day, build_statistics(records))
    try:
        text = await _generate(prompt)
    except Exception:
        logger.exception("Narrative generation failed for %s on %s", location.label, day)
        return FAILURE_MESSAGE

    if not text or not text.strip():
        logger.warning("Narrative model returned an empty response for %s on %s", location.label, day)
        return EMPTY_RESPONSE_MESSAGE
    return text
