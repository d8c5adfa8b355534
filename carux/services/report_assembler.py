"""
Report Assembler - Car UX Review Platform
carux/services/report_assembler.py

Builds the Report aggregate of one review:

  1. Load the review and its bound taxonomy version
  2. Load every task and category evaluation plus the live ScoringConfig
  3. Score each evaluated task; group scores by category via
     Task → Journey → Category
  4. Category score from the mean task score and the category evaluation
  5. Overall score = mean of the category scores that exist
  6. Summary text and top issues; persist and cache the result

A review with no evaluations still yields a report (every score None,
overall "N/A").
"""

from collections import defaultdict
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from uuid import UUID

import redis
import structlog

from carux.config import settings
from carux.core.exceptions import EntityNotFoundException
from carux.models.enumerations import Criterion
from carux.models.report import CategoryScoreBreakdown, Report, TaskIssue
from carux.models.taxonomy import TaskWithCategory
from carux.repositories.report_repository import ReportRepository
from carux.scoring import (
    NOT_AVAILABLE,
    calculate_category_breakdown,
    compute_overall_score,
    compute_task_score,
)
from carux.scoring.scale import format_score, score_label
from carux.scoring.utils import mean_of_present
from carux.services.cache import get_cache, report_cache_key
from carux.services.evaluation_service import EvaluationService
from carux.services.review_lifecycle import ReviewLifecycleService
from carux.services.scoring_config_service import ScoringConfigService
from carux.services.taxonomy_service import TaxonomyService

logger = structlog.get_logger(__name__)

# Scored tasks below half the scale are reported as issues
LOW_SCORE_THRESHOLD = Decimal("2")
TOP_ISSUES_LIMIT = 10


def _as_float(value: Optional[Decimal]) -> Optional[float]:
    return None if value is None else float(value)


class ReportAssembler:
    """Computes, stores and caches review reports."""

    def __init__(
        self,
        lifecycle: ReviewLifecycleService,
        taxonomy: TaxonomyService,
        evaluations: EvaluationService,
        scoring_config: ScoringConfigService,
        reports: ReportRepository,
    ):
        self.lifecycle = lifecycle
        self.taxonomy = taxonomy
        self.evaluations = evaluations
        self.scoring_config = scoring_config
        self.reports = reports

    def assemble_report(self, review_id: UUID, use_cache: bool = True) -> Report:
        """
        Return the report of `review_id` on the 0-4 scale.

        Raises:
            EntityNotFoundException: unknown review_id.
        """
        review = self.lifecycle.get_review(review_id)
        cache_key = report_cache_key(review_id)
        cache = get_cache() if use_cache else None

        if cache:
            try:
                cached = cache.get(cache_key, Report)
                if cached:
                    logger.debug("report_cache_hit", review_id=str(review_id))
                    return cached
            except redis.RedisError as e:
                logger.warning("report_cache_read_failed", review_id=str(review_id), error=str(e))

        report = self._build(review_id, review.taxonomy_version_id)
        report = self.reports.save(report)

        if cache:
            try:
                cache.set(cache_key, report, settings.CACHE_TTL_REPORTS)
            except redis.RedisError as e:
                logger.warning("report_cache_write_failed", review_id=str(review_id), error=str(e))

        logger.info(
            "report_assembled",
            review_id=str(review_id),
            categories=len(report.category_scores),
            overall_score=report.overall_score,
            issues=len(report.top_issues),
        )
        return report

    def get_stored_report(self, review_id: UUID) -> Report:
        """Last persisted report, without recomputing."""
        self.lifecycle.get_review(review_id)
        report = self.reports.get_by_review(review_id)
        if report is None:
            raise EntityNotFoundException("Report", review_id)
        return report

    # ------------------------------------------------------------------
    # Computation
    # ------------------------------------------------------------------

    def _build(self, review_id: UUID, version_id: UUID) -> Report:
        config = self.scoring_config.get_config()
        task_weights = config.task_weights
        category_weights = config.category_weights

        categories = self.taxonomy.list_categories(version_id)
        tasks = self.taxonomy.list_tasks(version_id)
        task_evaluations = {e.task_id: e for e in self.evaluations.list_task_evaluations(review_id)}
        category_evaluations = {
            e.category_id: e for e in self.evaluations.list_category_evaluations(review_id)
        }

        tasks_by_category: Dict[UUID, List[TaskWithCategory]] = defaultdict(list)
        for resolved in tasks:
            tasks_by_category[resolved.category.id].append(resolved)

        lines: List[CategoryScoreBreakdown] = []
        category_scores: List[Optional[Decimal]] = []
        scored_tasks: List[Tuple[TaskWithCategory, Optional[Decimal]]] = []
        for category in categories:
            task_scores: List[Optional[Decimal]] = []
            evaluated = 0
            for resolved in tasks_by_category.get(category.id, []):
                evaluation = task_evaluations.get(resolved.task.id)
                if evaluation is None:
                    continue
                evaluated += 1
                score = compute_task_score(evaluation, task_weights)
                task_scores.append(score)
                scored_tasks.append((resolved, score))

            category_evaluation = category_evaluations.get(category.id)
            responsiveness = getattr(category_evaluation, "responsiveness_score", None)
            writing = getattr(category_evaluation, "writing_score", None)
            emotional = getattr(category_evaluation, "emotional_score", None)
            avg_task_score = mean_of_present(task_scores)
            breakdown = calculate_category_breakdown(
                avg_task_score, category_evaluation, category_weights
            )
            category_scores.append(breakdown.category_score)
            lines.append(
                CategoryScoreBreakdown(
                    category_id=category.id,
                    category_name=category.name,
                    icon=category.icon,
                    tasks_total=len(tasks_by_category.get(category.id, [])),
                    tasks_evaluated=evaluated,
                    task_score=_as_float(avg_task_score),
                    responsiveness_score=responsiveness,
                    writing_score=writing,
                    emotional_score=emotional,
                    responsiveness_label=score_label(responsiveness, Criterion.RESPONSIVENESS),
                    writing_label=score_label(writing, Criterion.WRITING),
                    emotional_label=score_label(emotional, Criterion.EMOTIONAL),
                    base_score=_as_float(breakdown.base_score),
                    emotional_bonus=_as_float(breakdown.emotional_bonus),
                    score=_as_float(breakdown.category_score),
                    score_display=format_score(breakdown.category_score),
                    category_evaluated=category_evaluation is not None,
                )
            )

        overall = compute_overall_score(category_scores)
        issues = self._top_issues(scored_tasks, task_evaluations)

        return Report(
            review_id=review_id,
            taxonomy_version_id=version_id,
            category_scores=lines,
            overall_score=NOT_AVAILABLE if overall == NOT_AVAILABLE else float(overall),
            overall_display=format_score(overall),
            summary=self._summary(lines, issues),
            top_issues=issues,
        )

    @staticmethod
    def _top_issues(
        scored_tasks: List[Tuple[TaskWithCategory, Optional[Decimal]]],
        task_evaluations: Dict,
    ) -> List[TaskIssue]:
        """Not-doable tasks first, then scored tasks below the threshold, lowest first."""
        not_doable: List[TaskIssue] = []
        low: List[Tuple[Decimal, TaskIssue]] = []
        for resolved, score in scored_tasks:
            evaluation = task_evaluations[resolved.task.id]
            if evaluation.doable is False:
                not_doable.append(
                    TaskIssue(
                        task_id=resolved.task.id,
                        task_name=resolved.task.name,
                        category_name=resolved.category.name,
                        kind="not_doable",
                        score=_as_float(score),
                        reason=evaluation.undoable_reason,
                    )
                )
            elif score is not None and score < LOW_SCORE_THRESHOLD:
                low.append(
                    (
                        score,
                        TaskIssue(
                            task_id=resolved.task.id,
                            task_name=resolved.task.name,
                            category_name=resolved.category.name,
                            kind="low_score",
                            score=_as_float(score),
                        ),
                    )
                )

        not_doable.sort(key=lambda i: (i.category_name.lower(), i.task_name.lower()))
        low.sort(key=lambda pair: (pair[0], pair[1].category_name.lower(), pair[1].task_name.lower()))
        return (not_doable + [issue for _, issue in low])[:TOP_ISSUES_LIMIT]

    @staticmethod
    def _summary(lines: List[CategoryScoreBreakdown], issues: List[TaskIssue]) -> str:
        """Scale-independent one-paragraph summary."""
        scored = [line for line in lines if line.score is not None]
        if not scored:
            return f"No categories scored yet (0 of {len(lines)})."

        strongest = sorted(scored, key=lambda l: (-l.score, l.category_name.lower()))[0]
        weakest = sorted(scored, key=lambda l: (l.score, l.category_name.lower()))[0]
        parts = [f"{len(scored)} of {len(lines)} categories scored."]
        if strongest.category_id == weakest.category_id:
            parts.append(f"Only scored category: {strongest.category_name}.")
        else:
            parts.append(f"Strongest: {strongest.category_name}.")
            parts.append(f"Weakest: {weakest.category_name}.")

        not_doable = sum(1 for i in issues if i.kind == "not_doable")
        if not_doable:
            parts.append(f"{not_doable} task(s) could not be completed.")
        return " ".join(parts)
