"""Run a contribution calculation for one city and month range."""
from __future__ import annotations

from sqlalchemy.orm import Session

from contribcalc.calculations import generate_results, month_range, validate_calculation_params
from contribcalc.calculations.months import split_yearmonth
from contribcalc.core.errors import CityNotFoundError, InvalidParametersError, NoSalaryDataError
from contribcalc.core.log import get_logger, log_context, timeit
from contribcalc.models import CalculationResult
from contribcalc.repositories import CityRepository, ResultRepository, SalaryRepository
from contribcalc.schemas import CalculationSummary

LOGGER = get_logger(__name__)


class CalculationService:
    """Fetch a tenant's policy and salaries, compute, and replace stored results."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._cities = CityRepository(session)
        self._salaries = SalaryRepository(session)
        self._results = ResultRepository(session)

    def calculate(
        self,
        company_id: str,
        city_name: str,
        start_month: int,
        end_month: int,
    ) -> CalculationSummary:
        error = validate_calculation_params(start_month, end_month).error
        if error is not None:
            raise InvalidParametersError(
                error.message,
                reason=error.value,
                start_month=start_month,
                end_month=end_month,
            )

        with log_context.scope(company=company_id, city=city_name):
            year, _ = split_yearmonth(start_month)
            city = self._cities.find_policy(company_id, city_name, year)
            if city is None:
                raise CityNotFoundError(
                    f"No contribution policy found for city {city_name}",
                    city_name=city_name,
                )
            if city.year != year:
                LOGGER.info(
                    "No %s policy for %d, using %d", city_name, year, city.year
                )

            salaries = self._salaries.in_range(company_id, start_month, end_month)
            if not salaries:
                raise NoSalaryDataError(
                    "No salary data in the selected month range",
                    start_month=start_month,
                    end_month=end_month,
                )

            with timeit(
                f"Contribution calculation {start_month}-{end_month}",
                logger=LOGGER,
                unit="employees",
                session=self._session,
            ) as timer:
                results = generate_results(
                    city.to_policy(),
                    [salary.to_record() for salary in salaries],
                    start_month,
                    end_month,
                )
                rows = [
                    CalculationResult.from_contribution(result, created_by=company_id)
                    for result in results
                ]
                try:
                    self._results.replace_run(
                        company_id,
                        city_name=city.city_name,
                        start_month=start_month,
                        end_month=end_month,
                        rows=rows,
                    )
                    self._session.commit()
                except Exception:
                    self._session.rollback()
                    LOGGER.exception("Failed to store calculation results")
                    raise
                timer.set_total(len(rows))

        return CalculationSummary(
            count=len(rows),
            message="Calculation finished and results saved",
            city_name=city.city_name,
            yearmonth_start=start_month,
            yearmonth_end=end_month,
            months=month_range(start_month, end_month),
        )
