# core/models/weather_response.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class ForecastSample:
    timestamp: datetime
    temperature_f: float


@dataclass
class ForecastResult:
    """Почасовой прогноз в порядке, в котором его вернул сервис."""
    samples: List[ForecastSample] = field(default_factory=list)

    @property
    def times(self) -> List[datetime]:
        return [s.timestamp for s in self.samples]

    @property
    def temperatures(self) -> List[float]:
        return [s.temperature_f for s in self.samples]

    def __len__(self) -> int:
        return len(self.samples)
