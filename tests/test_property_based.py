# tests/test_property_based.py
"""
Property-Based Tests

Hypothesis tests with max_examples=500, covering:
  - task score bounds and missing-field tolerance
  - emotional bonus monotonicity
  - calculator purity
  - exactly one active taxonomy version
"""

from decimal import Decimal

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from carux.models.scoring_config import CategoryWeights, TaskWeights
from carux.models.taxonomy import TaxonomyVersionCreate
from carux.repositories.base import InMemoryDatabase
from carux.repositories.version_repository import TaxonomyVersionRepository
from carux.scoring import (
    NOT_AVAILABLE,
    compute_category_score,
    compute_overall_score,
    compute_task_score,
)

# ---------------------------------------------------------------------------
# Shared strategies
# ---------------------------------------------------------------------------

rating_st = st.one_of(st.none(), st.integers(min_value=1, max_value=4))
weight_st = st.floats(min_value=0.0, max_value=100.0, allow_nan=False, allow_infinity=False)
positive_weight_st = st.floats(min_value=0.01, max_value=100.0, allow_nan=False, allow_infinity=False)
avg_task_st = st.one_of(
    st.none(),
    st.decimals(min_value=0, max_value=4, places=4, allow_nan=False, allow_infinity=False),
)

PROPERTY_SETTINGS = settings(
    max_examples=500,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)


@st.composite
def task_evaluation_st(draw, doable=st.one_of(st.none(), st.booleans())):
    """Draw a task evaluation dict with any subset of fields present."""
    evaluation = {}
    value = draw(doable)
    if value is not None:
        evaluation["doable"] = value
    for field in ("usability_score", "visuals_score"):
        rating = draw(rating_st)
        if rating is not None:
            evaluation[field] = rating
    return evaluation


@st.composite
def task_weights_st(draw):
    return TaskWeights(
        doable=draw(positive_weight_st), usability=draw(weight_st), visuals=draw(weight_st)
    )


@st.composite
def category_weights_st(draw):
    return CategoryWeights(
        tasks=draw(positive_weight_st),
        responsiveness=draw(weight_st),
        writing=draw(weight_st),
        emotional=draw(weight_st),
    )


# ---------------------------------------------------------------------------
# Task score
# ---------------------------------------------------------------------------


class TestTaskScoreProperties:
    """Bounds and missing-field tolerance."""

    @PROPERTY_SETTINGS
    @given(task_evaluation_st(doable=st.booleans()), task_weights_st())
    def test_known_doable_scores_within_bounds(self, evaluation, weights):
        score = compute_task_score(evaluation, weights)
        assert score is not None
        assert Decimal("0") <= score <= Decimal("4")

    @PROPERTY_SETTINGS
    @given(task_evaluation_st(doable=st.none()), task_weights_st())
    def test_unknown_doable_is_unscorable(self, evaluation, weights):
        assert compute_task_score(evaluation, weights) is None

    @PROPERTY_SETTINGS
    @given(task_evaluation_st(), task_weights_st())
    def test_task_score_is_pure(self, evaluation, weights):
        snapshot = dict(evaluation)
        first = compute_task_score(evaluation, weights)
        second = compute_task_score(evaluation, weights)
        assert first == second
        assert evaluation == snapshot


# ---------------------------------------------------------------------------
# Category score
# ---------------------------------------------------------------------------


class TestCategoryScoreProperties:
    """Emotional bonus only ever adds."""

    @PROPERTY_SETTINGS
    @given(avg_task_st, rating_st, rating_st, st.integers(min_value=1, max_value=3), category_weights_st())
    def test_higher_emotional_never_lowers_score(
        self, avg_task, responsiveness, writing, emotional, weights
    ):
        base_eval = {"responsiveness_score": responsiveness, "writing_score": writing}
        lower = compute_category_score(avg_task, {**base_eval, "emotional_score": emotional}, weights)
        higher = compute_category_score(
            avg_task, {**base_eval, "emotional_score": emotional + 1}, weights
        )
        if lower is None:
            assert higher is None
        else:
            assert higher >= lower

    @PROPERTY_SETTINGS
    @given(avg_task_st, rating_st, rating_st, rating_st, category_weights_st())
    def test_bonus_never_subtracts(self, avg_task, responsiveness, writing, emotional, weights):
        without = compute_category_score(
            avg_task, {"responsiveness_score": responsiveness, "writing_score": writing}, weights
        )
        with_emotional = compute_category_score(
            avg_task,
            {
                "responsiveness_score": responsiveness,
                "writing_score": writing,
                "emotional_score": emotional,
            },
            weights,
        )
        if without is not None:
            assert with_emotional >= without
            # base stays in [0, 4]; only the bonus can push past the maximum
            assert without <= Decimal("4")


# ---------------------------------------------------------------------------
# Overall score
# ---------------------------------------------------------------------------


class TestOverallScoreProperties:

    @PROPERTY_SETTINGS
    @given(st.lists(st.one_of(st.none(), st.decimals(min_value=0, max_value=5, places=4))))
    def test_overall_between_min_and_max(self, scores):
        result = compute_overall_score(scores)
        present = [s for s in scores if s is not None]
        if not present:
            assert result == NOT_AVAILABLE
        else:
            assert min(present) <= result <= max(present)


# ---------------------------------------------------------------------------
# Versioning invariant
# ---------------------------------------------------------------------------


class TestVersionInvariant:
    """Exactly one active version after any create / activate sequence."""

    @PROPERTY_SETTINGS
    @given(
        st.lists(
            st.one_of(
                st.tuples(st.just("create"), st.booleans()),
                st.tuples(st.just("activate"), st.integers(min_value=0, max_value=20)),
            ),
            min_size=1,
            max_size=15,
        )
    )
    def test_exactly_one_active(self, operations):
        repo = TaxonomyVersionRepository(InMemoryDatabase())
        created = []
        for op, arg in operations:
            if op == "create":
                created.append(
                    repo.create(TaxonomyVersionCreate(label=f"v{len(created)}", activate=arg)).id
                )
            elif created:
                repo.set_active(created[arg % len(created)])

            if created:
                active = [v for v in repo.get_all() if v.is_active]
                assert len(active) == 1
                assert repo.get_active().id == active[0].id
