"""
Tests for the grade statistics pipelines, result shaping and class id parsing.
"""
import math

import bson
import pytest

from tools import (
    GradeStatsNotFound,
    PASSING_THRESHOLD,
    build_class_stats_pipeline,
    build_global_stats_pipeline,
    class_stats_from_rows,
    coerce_class_id,
    get_class_grade_stats,
    get_global_grade_stats,
    global_stats_from_rows,
)


def stages(pipeline):
    return [next(iter(stage)) for stage in pipeline]


class TestGlobalPipeline:

    def test_stage_order(self):
        assert stages(build_global_stats_pipeline()) == [
            "$match", "$unwind", "$match", "$group", "$project",
        ]

    def test_filters(self):
        pipeline = build_global_stats_pipeline()
        assert pipeline[0]["$match"] == {"scores.score": {"$exists": True, "$type": "double"}}
        assert pipeline[2]["$match"] == {"scores.score": {"$gt": PASSING_THRESHOLD}}

    def test_total_is_grouped_after_threshold(self):
        group = build_global_stats_pipeline()[3]["$group"]
        assert group["total_learners"] == group["learners_above_70"] == {"$sum": 1}

    def test_runs_on_grades_collection(self, db, grades):
        grades.aggregate_rows = [
            {"total_learners": 2, "learners_above_70": 2, "percentage_above_70": 100.0},
        ]
        assert get_global_grade_stats(db) == {
            "total_learners": 2,
            "learners_above_70": 2,
            "percentage_above_70": 100.0,
        }
        assert grades.pipelines == [build_global_stats_pipeline()]


class TestClassPipeline:

    def test_stage_order(self):
        assert stages(build_class_stats_pipeline(1)) == [
            "$match", "$project", "$facet", "$project", "$project",
        ]

    def test_matches_class_first(self):
        assert build_class_stats_pipeline(12)[0] == {"$match": {"class_id": {"$eq": 12}}}

    def test_facet_branches(self):
        facet = build_class_stats_pipeline(1)[2]["$facet"]
        assert facet["learners_above_70"][0] == {"$match": {"avg": {"$gt": PASSING_THRESHOLD}}}
        assert facet["total_learners"] == [{"$count": "count"}]

    def test_zero_total_guard(self):
        percentage = build_class_stats_pipeline(1)[4]["$project"]["percentage_above_70"]
        assert percentage["$cond"]["if"] == {"$eq": ["$total_learners", 0]}
        assert percentage["$cond"]["then"] == 0

    @pytest.mark.parametrize("raw", ["1e20", "99999999999999999999", "-1e30", "Infinity"])
    def test_huge_ids_encode(self, raw):
        bson.encode(build_class_stats_pipeline(coerce_class_id(raw))[0])

    def test_runs_on_grades_collection(self, db, grades):
        grades.aggregate_rows = [
            {"_id": None, "total_learners": 2, "learners_above_70": 1, "percentage_above_70": 50.0},
        ]
        assert get_class_grade_stats(db, 1) == {
            "total_learners": 2,
            "learners_above_70": 1,
            "percentage_above_70": 50.0,
        }
        assert grades.pipelines == [build_class_stats_pipeline(1)]

    def test_nan_never_reaches_the_store(self, db, grades):
        with pytest.raises(GradeStatsNotFound):
            get_class_grade_stats(db, math.nan)
        assert grades.pipelines == []


class TestShaping:

    def test_global_no_rows(self):
        with pytest.raises(GradeStatsNotFound):
            global_stats_from_rows([])

    def test_global_row(self):
        row = {"total_learners": 3, "learners_above_70": 3, "percentage_above_70": 100.0}
        assert global_stats_from_rows([row]) == row

    def test_class_empty_facet_is_not_found(self):
        row = {"_id": None, "total_learners": 0, "learners_above_70": 0, "percentage_above_70": 0}
        with pytest.raises(GradeStatsNotFound):
            class_stats_from_rows([row])
        with pytest.raises(GradeStatsNotFound):
            class_stats_from_rows([])

    def test_class_none_above(self):
        row = {"_id": None, "total_learners": 4, "learners_above_70": 0, "percentage_above_70": 0.0}
        assert class_stats_from_rows([row]) == {
            "total_learners": 4,
            "learners_above_70": 0,
            "percentage_above_70": 0.0,
        }


class TestCoerceClassId:

    @pytest.mark.parametrize("raw, expected", [
        ("1", 1),
        (" 12 ", 12),
        ("7.0", 7),
        ("7.", 7),
        ("+300", 300),
        ("3e2", 300),
        ("0x10", 16),
        ("0o17", 15),
        ("0b101", 5),
        ("  ", 0),
    ])
    def test_numeric(self, raw, expected):
        value = coerce_class_id(raw)
        assert value == expected
        assert isinstance(value, int)

    def test_fraction_stays_float(self):
        assert coerce_class_id("1.5") == 1.5
        assert coerce_class_id(".5") == 0.5

    @pytest.mark.parametrize("raw", ["1e20", "99999999999999999999", "9223372036854775808"])
    def test_out_of_int64_range_stays_float(self, raw):
        value = coerce_class_id(raw)
        assert isinstance(value, float)
        assert value == float(raw)

    def test_int64_edges(self):
        assert coerce_class_id("-9223372036854775808") == -(2 ** 63)
        assert isinstance(coerce_class_id("-9223372036854775808"), int)

    def test_infinity(self):
        assert coerce_class_id("Infinity") == math.inf
        assert coerce_class_id("-Infinity") == -math.inf

    @pytest.mark.parametrize("raw", [
        "abc", "1a", "NaN", "1_0", "inf", "infinity", "INFINITY", "-0x10", "1e", "0x", "1.2.3",
    ])
    def test_non_numeric_is_nan(self, raw):
        assert math.isnan(coerce_class_id(raw))
