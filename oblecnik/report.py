"""Terminal report for a recommendation."""
from __future__ import annotations

from typing import Dict, Optional

from rich.console import Console
from rich.text import Text

from .entities import ClothingSummary, JacketLevel, TrouserWeight, WeatherSummary
from .services.recommendation import Recommendation


RAIN_STYLES: Dict[str, str] = {
    "sunny": "bright_yellow",
    "cloudy": "bright_white",
    "light rain": "bright_cyan",
    "heavy rain": "bright_blue",
    "no rain": "bright_yellow",
    "drizzle": "bright_cyan",
    "rain": "bright_blue",
}

JACKET_LINES = {
    JacketLevel.LIGHT: ("Light jacket", "bright_cyan"),
    JacketLevel.INSULATED: ("Insulated jacket", "bright_blue"),
}

TROUSER_LINES = {
    TrouserWeight.SHORTS: ("Shorts", "bright_yellow"),
    TrouserWeight.REGULAR: ("Trousers", "bright_white"),
    TrouserWeight.INSULATED: ("Insulated trousers", "bright_magenta"),
}


def weather_line(weather: WeatherSummary) -> Text:
    line = Text("Temperatures from ")
    line.append(f"{weather.min_temp:.1f}", style="bold bright_blue")
    line.append(" °C to ")
    line.append(f"{weather.max_temp:.1f}", style="bold bright_red")
    line.append(" °C, ")
    if weather.wind_speed_ms > 0:
        line.append("wind up to ")
        line.append(f"{weather.wind_speed_ms:.1f}", style="bold bright_cyan")
        line.append(" m/s, ")
    else:
        line.append("calm", style="bold bright_cyan")
        line.append(", ")
    rain = weather.rain_scale.label(weather.rain_index)
    line.append(rain, style=RAIN_STYLES.get(rain, ""))
    return line


def clothing_lines(clothing: ClothingSummary) -> Text:
    text = Text()
    if clothing.hoodie:
        text.append("Hoodie\n", style="bright_red")
    else:
        text.append("T-shirt\n", style="bright_green")
    jacket = JACKET_LINES.get(JacketLevel(clothing.jacket))
    if jacket is not None:
        label, style = jacket
        text.append(f"{label}\n", style=style)
    label, style = TROUSER_LINES[TrouserWeight(clothing.trousers)]
    text.append(label, style=style)
    return text


def render_report(recommendation: Recommendation) -> Text:
    report = Text()
    report.append(f"Forecast for {recommendation.target_day:%d. %m. %Y}")
    report.append(f" ({recommendation.source})\n\n", style="dim")
    report.append_text(weather_line(recommendation.weather))
    report.append("\n\n")
    report.append("Clothing:", style="black on white")
    report.append("\n")
    report.append_text(clothing_lines(recommendation.clothing))
    return report


def print_report(recommendation: Recommendation, console: Optional[Console] = None) -> None:
    console = console or Console(highlight=False, markup=False)
    console.print(render_report(recommendation))


__all__ = ["render_report", "print_report", "weather_line", "clothing_lines"]
