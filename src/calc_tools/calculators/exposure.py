"""
Monte Carlo Expected Exposure (EE) for a simple European call.

The underlying follows geometric Brownian motion:

    S_t = S_{t-1} * exp((r - 0.5 * sigma^2) * dt + sigma * sqrt(dt) * Z)

and the exposure on each path is the positive part of the contract value,
max(0, S_t - K). EE(t) is the average exposure over all simulations.

All simulations are vectorised with numpy; one (simulations x steps) matrix
of standard normals drives every path.
"""

import logging

import numpy as np
from pydantic import BaseModel, Field

from ..exceptions import InvalidInputError
from ..validation import CalculatorInput, validate_input

logger = logging.getLogger(__name__)

DEFAULT_MAX_CELLS = 5_000_000


class ExpectedExposureInput(CalculatorInput):
    initial_price: float = Field(gt=0)
    strike_price: float = Field(gt=0)
    time_to_maturity: float = Field(gt=0)  # years
    risk_free_rate: float = Field(ge=0)  # percent
    volatility: float = Field(gt=0)  # percent
    num_simulations: int = Field(gt=0)
    num_time_steps: int = Field(gt=0)
    seed: int | None = None


class ExposurePoint(BaseModel):
    time: float  # years
    ee: float


class ExpectedExposureResult(BaseModel):
    profile: list[ExposurePoint]  # num_time_steps + 1 points, from t = 0
    peak: ExposurePoint


def simulate_paths(
    initial_price: float,
    rate: float,
    vol: float,
    dt: float,
    num_simulations: int,
    num_time_steps: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Simulate GBM price paths.

    Args:
        rate: Risk-free rate as a fraction (0.05 = 5%)
        vol: Volatility as a fraction

    Returns:
        Array of shape (num_simulations, num_time_steps); column j is the
        price after step j + 1
    """
    z = rng.standard_normal((num_simulations, num_time_steps))
    log_steps = (rate - 0.5 * vol**2) * dt + vol * np.sqrt(dt) * z
    return initial_price * np.exp(np.cumsum(log_steps, axis=1))


def expected_exposure(
    initial_price: float,
    strike_price: float,
    time_to_maturity: float,
    risk_free_rate: float,
    volatility: float,
    num_simulations: int,
    num_time_steps: int,
    seed: int | None = None,
    max_cells: int = DEFAULT_MAX_CELLS,
) -> ExpectedExposureResult:
    """
    Run the simulation and build the EE profile.

    ``risk_free_rate`` and ``volatility`` are percentages. The profile starts
    at time 0 with EE 0 (nothing has been simulated yet) and has one point per
    time step after that. The peak is the earliest point with the highest EE.

    Raises:
        InvalidInputError: If inputs are out of range or the run would need
                           more than ``max_cells`` simulated prices
    """
    data = validate_input(
        ExpectedExposureInput,
        initial_price=initial_price,
        strike_price=strike_price,
        time_to_maturity=time_to_maturity,
        risk_free_rate=risk_free_rate,
        volatility=volatility,
        num_simulations=num_simulations,
        num_time_steps=num_time_steps,
        seed=seed,
    )

    cells = data.num_simulations * data.num_time_steps
    if cells > max_cells:
        raise InvalidInputError(
            {
                "num_simulations": (
                    f"Simulations x time steps is {cells:,}; the limit is {max_cells:,}."
                )
            }
        )

    dt = data.time_to_maturity / data.num_time_steps
    rng = np.random.default_rng(data.seed)
    paths = simulate_paths(
        data.initial_price,
        data.risk_free_rate / 100,
        data.volatility / 100,
        dt,
        data.num_simulations,
        data.num_time_steps,
        rng,
    )

    exposures = np.maximum(paths - data.strike_price, 0.0).mean(axis=0)
    ee_values = np.concatenate(([0.0], exposures))

    profile = [
        ExposurePoint(time=step * dt, ee=float(ee)) for step, ee in enumerate(ee_values)
    ]

    peak = profile[0]
    for point in profile:
        if point.ee > peak.ee:
            peak = point

    logger.info(
        f"Expected exposure: {data.num_simulations} simulations x "
        f"{data.num_time_steps} steps, peak {peak.ee:.4f} at t={peak.time:.2f}"
    )

    return ExpectedExposureResult(profile=profile, peak=peak)
