# tankdrain/constants.py
"""Физические константы и численные значения по умолчанию.

Все пороги вынесены сюда отдельными именами: порог приёмки калибровки,
порог «прилипания» к нулю при воспроизведении и порог фактического
опорожнения совпадают численно лишь случайно и настраиваются независимо
через :class:`~tankdrain.domain.drain_settings.DrainSettings`.
"""

GRAVITY = 9.81  # м/с², фиксировано

# --- Геометрия ---
RADIUS_SQ_FLOOR = 1e-3  # м², нижняя граница r(h)² у особых точек конуса/сферы

# --- Интегратор ---
DEFAULT_RTOL = 1e-6
DEFAULT_ATOL = 1e-6
MAX_TOLERANCE = 1e-4  # грубее нельзя: не разрешается поведение √h у дна
DEFAULT_GRID_POINTS = 1000

# --- Калибровка ---
ACCEPT_HEIGHT = 0.05  # м, бак «практически пуст» к концу интервала
COARSE_HEIGHT = 0.5  # м, выше – грубая коррекция площади
COARSE_STEP = 1.2
FINE_STEP = 1.1
SEARCH_START_AREA = 0.02  # м²
MAX_SEARCH_ITERATIONS = 1000

CLOSED_FORM_FACTOR = 1.25
ESCALATION_FACTOR = 1.5

FIXED_OUTLET_AREA = 0.15  # м², подобрано для сферы R = 2.5 м и T = 70 с

# --- Диагностика и воспроизведение ---
EMPTY_HEIGHT = 0.01  # м, «фактическое» опорожнение для оценки времени
SNAP_HEIGHT = 0.05  # м
SNAP_TIME_FRACTION = 0.95
