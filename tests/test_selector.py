"""
Tests for working set selection.
"""

from price_sync.processor.selector import (
    BoundedScan,
    ExplicitSkus,
    FullScan,
    parse_sku_list,
    prioritize,
    read_sku_list_file,
    select_working_set,
)


class TestReadSkuListFile:
    """Tests for read_sku_list_file function."""

    def test_missing_file_returns_empty(self, tmp_path):
        assert read_sku_list_file(str(tmp_path / "nope.txt")) == []

    def test_skips_comments_and_blank_lines(self, tmp_path):
        path = tmp_path / "sku_list.txt"
        path.write_text("# header\nMLA1\n\n  MLA2  \n#MLA3\n", encoding="utf-8")
        assert read_sku_list_file(str(path)) == ["MLA1", "MLA2"]

    def test_handles_crlf(self, tmp_path):
        path = tmp_path / "sku_list.txt"
        path.write_bytes(b"MLA1\r\nMLA2\r\n")
        assert read_sku_list_file(str(path)) == ["MLA1", "MLA2"]


class TestParseSkuList:
    """Tests for parse_sku_list function."""

    def test_comma_separated(self):
        assert parse_sku_list("A, B,,C ,") == ["A", "B", "C"]

    def test_empty(self):
        assert parse_sku_list("") == []


class TestPrioritize:
    """Tests for prioritize function."""

    def test_moves_priority_to_front_once(self):
        assert prioritize(["A", "P", "B", "P"], "P") == ["P", "A", "B"]

    def test_inserts_missing_priority(self):
        assert prioritize(["A", "B"], "P") == ["P", "A", "B"]

    def test_no_priority_keeps_order(self):
        assert prioritize(["B", "A"], "") == ["B", "A"]


class TestSelectWorkingSet:
    """Tests for select_working_set precedence."""

    def test_default_is_bounded_scan(self, make_settings):
        assert select_working_set(make_settings(batch_size=50)) == BoundedScan(limit=50)

    def test_full_sync_wins_over_everything(self, make_settings, tmp_path):
        (tmp_path / "sku_list.txt").write_text("A\nB\n", encoding="utf-8")
        config = make_settings(full_sync=True, batch_size=5, sku_list="C", test_sku="P")
        assert select_working_set(config) == FullScan(limit=0)

    def test_file_list_wins_over_env_list(self, make_settings, tmp_path):
        (tmp_path / "sku_list.txt").write_text("A\nB\n", encoding="utf-8")
        config = make_settings(sku_list="C,D")
        assert select_working_set(config) == ExplicitSkus(skus=("A", "B"))

    def test_env_list_used_without_file(self, make_settings):
        config = make_settings(sku_list="C, D")
        assert select_working_set(config) == ExplicitSkus(skus=("C", "D"))

    def test_empty_file_falls_back_to_env_list(self, make_settings, tmp_path):
        (tmp_path / "sku_list.txt").write_text("# nothing yet\n", encoding="utf-8")
        config = make_settings(sku_list="C")
        assert select_working_set(config) == ExplicitSkus(skus=("C",))

    def test_priority_sku_first_and_not_duplicated(self, make_settings, tmp_path):
        (tmp_path / "sku_list.txt").write_text("A\nP\nB\n", encoding="utf-8")
        plan = select_working_set(make_settings(test_sku=" P "))
        assert plan == ExplicitSkus(skus=("P", "A", "B"))
        assert plan.skus.count("P") == 1

    def test_priority_sku_alone_is_an_explicit_list(self, make_settings):
        plan = select_working_set(make_settings(test_sku="P"))
        assert plan == ExplicitSkus(skus=("P",))
