from __future__ import annotations

from dataclasses import dataclass

import pandas as pd
from scipy.stats import chi2_contingency

from application.preprocessing import FLAVOR_COL, FLAVOR_LEVELS, RESPONSE_COL

MIN_EXPECTED = 5.0


@dataclass
class ChiSquaredResult:
    statistic: float
    p_value: float
    dof: int
    observed: pd.DataFrame
    expected: pd.DataFrame
    zero_cells: int
    small_expected_cells: int

    @property
    def assumptions_met(self) -> bool:
        return self.zero_cells == 0 and self.small_expected_cells == 0


def contingency_table(df: pd.DataFrame) -> pd.DataFrame:
    """Flavor x vegetarian counts, every level present even if empty."""
    table = pd.crosstab(df[FLAVOR_COL], df[RESPONSE_COL])
    return table.reindex(index=list(FLAVOR_LEVELS), columns=[0, 1], fill_value=0)


def chi_squared_test(df: pd.DataFrame) -> ChiSquaredResult:
    """
    Pearson chi-squared test of independence.
    Zero observed cells and expected counts below 5 break its large-sample approximation;
    both are counted so the result can be reported as invalid.
    """
    observed = contingency_table(df)
    # flavors with no dishes at all have no expected counts to compare against
    tested = observed.loc[observed.sum(axis=1) > 0, observed.sum(axis=0) > 0]
    statistic, p_value, dof, expected = chi2_contingency(tested.to_numpy(), correction=False)
    expected = pd.DataFrame(expected, index=tested.index, columns=tested.columns)
    expected = expected.reindex(observed.index, fill_value=0.0)
    return ChiSquaredResult(
        statistic=float(statistic),
        p_value=float(p_value),
        dof=int(dof),
        observed=observed,
        expected=expected,
        zero_cells=int((observed.to_numpy() == 0).sum()),
        small_expected_cells=int((expected.to_numpy() < MIN_EXPECTED).sum()),
    )
