"""
Tests for the blood pressure classifier.
"""
import pytest

from bplog.utils.classifier import Category, classify


class TestClassify:
    """Tests for classify, boundaries checked on both sides."""

    def test_examples(self):
        assert classify(118, 76) is Category.NORMAL
        assert classify(122, 81) is Category.STAGE_1

    def test_normal_elevated_boundary(self):
        assert classify(119, 79) is Category.NORMAL
        assert classify(120, 79) is Category.ELEVATED

    def test_diastolic_80_boundary(self):
        assert classify(119, 79) is Category.NORMAL
        assert classify(119, 80) is Category.STAGE_1

    def test_stage_1_boundary(self):
        assert classify(129, 79) is Category.ELEVATED
        assert classify(130, 79) is Category.STAGE_1
        assert classify(130, 80) is Category.STAGE_1

    def test_stage_2_boundary(self):
        assert classify(139, 89) is Category.STAGE_1
        assert classify(140, 89) is Category.STAGE_2
        assert classify(139, 90) is Category.STAGE_2

    def test_crisis_boundary(self):
        assert classify(179, 119) is Category.STAGE_2
        assert classify(180, 119) is Category.CRISIS
        assert classify(179, 120) is Category.CRISIS

    def test_either_value_can_raise_category(self):
        assert classify(100, 95) is Category.STAGE_2
        assert classify(185, 70) is Category.CRISIS

    @pytest.mark.parametrize('systolic', [-10, 0, 60, 119, 120, 129, 130, 139, 140, 179, 180, 400])
    @pytest.mark.parametrize('diastolic', [-5, 0, 40, 79, 80, 89, 90, 119, 120, 300])
    def test_total(self, systolic, diastolic):
        assert classify(systolic, diastolic) in set(Category)


class TestCategoryLabels:
    """Tests for the display views of a category."""

    def test_labels(self):
        assert Category.STAGE_1.label == 'Stage 1'
        assert Category.CRISIS.label == 'Crisis'

    def test_collapsed_view_merges_stage_2_and_crisis(self):
        assert Category.STAGE_1.collapsed_label == 'High-1'
        assert Category.STAGE_2.collapsed_label == 'High-2'
        assert Category.CRISIS.collapsed_label == 'High-2'

    def test_every_category_has_a_badge_class(self):
        for category in Category:
            assert category.css_class.startswith('status-')
