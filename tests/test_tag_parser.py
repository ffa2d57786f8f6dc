import pytest
from nexus_image_options.utils.tag_parser import parse_path, is_release, split_build, tag_of, artifact_id_of
from nexus_image_options.utils.tag_ordering import compare_keys, compare_tags, split_key


def path(tag: str, component: str = "COMPONENT") -> str:
    return f"v2/{component}/manifests/{tag}"


class TestTagDecomposition:
    """Tests for taking search paths apart."""

    @pytest.mark.parametrize("version, separator, build", [
        ("0.0.0", "_", "1"),
        ("0.1.2", "_", "3"),
        ("1.2.1.2", "-", "4"),
        ("v1.2.1.5", "-", "6"),
        ("v2.2.1.", "_", "16"),
        ("v2.2.0.", "_", "beta6"),
        ("v2.2.0.", "+", "alpha1"),
        ("sprint-11", "_", "4"),
        ("ISSUE-1234-bug-description", "-", "7"),
        ("feature_a+b", "+", "c"),
    ])
    def test_version_and_build(self, version, separator, build):
        tag = parse_path(path(version + separator + build))
        assert tag.artifact_id == "COMPONENT"
        assert tag.version_or_branch == version
        assert tag.separator == separator
        assert tag.build == build
        assert tag.raw_tag == version + separator + build

    @pytest.mark.parametrize("raw_tag", [
        "1.2.3",
        "latest",
        "v1.2.3.",
        "feature.x",
        "-4",
        "1.2.3-",
        "1.2.3-rc.1",
    ])
    def test_no_build_suffix(self, raw_tag):
        tag = parse_path(path(raw_tag))
        assert tag.build == ""
        assert tag.separator == ""
        assert tag.version_or_branch == raw_tag

    def test_last_separator_wins(self):
        assert split_build("ISSUE-234-one-issue-12") == ("ISSUE-234-one-issue", "-", "12")
        assert split_build("sprint_11-13") == ("sprint_11", "-", "13")
        assert split_build("1.2.3--4") == ("1.2.3-", "-", "4")

    @pytest.mark.parametrize("value, expected", [
        ("v2/my-service/manifests/1.2.3-4", "my-service"),
        ("v2/my-service", "my-service"),
        ("my-service", "my-service"),
        ("/my-service/manifests", ""),
    ])
    def test_artifact_id(self, value, expected):
        assert artifact_id_of(value) == expected

    def test_tag_is_last_segment(self):
        assert tag_of("v2/my-service/manifests/1.2.3-4") == "1.2.3-4"
        assert tag_of("1.2.3-4") == "1.2.3-4"
        assert tag_of("v2//manifests/1.2.3") == "1.2.3"

    def test_long_segments_are_not_stripped(self):
        short = "a" * 199
        long = "a" * 200
        assert tag_of(f"v2/{short}/1.2.3") == "1.2.3"
        assert tag_of(f"v2/{long}/1.2.3") == f"{long}/1.2.3"

    @pytest.mark.parametrize("raw_tag, version_or_branch, separator, build, comparison_key", [
        ("v1.2.3_4", "v1.2.3", "_", "4", "1.2.3_4"),
        ("rc1.2.3_4", "rc1.2.3", "_", "4rc", "1.2.3_4rc"),
        ("rc1.2.3", "rc1.2.3", "-", "rc", "1.2.3-rc"),
        ("v2.2.1._16", "v2.2.1.", "_", "16", "2.2.1._16"),
        ("vnext-3", "vnext", "-", "3", "vnext-3"),
        ("v1-3", "v1", "-", "3", "v1-3"),
        ("sprint-11_4", "sprint-11", "_", "4", "sprint-11_4"),
    ])
    def test_comparison_key(self, raw_tag, version_or_branch, separator, build, comparison_key):
        tag = parse_path(path(raw_tag))
        assert tag.raw_tag == raw_tag
        assert tag.version_or_branch == version_or_branch
        assert tag.separator == separator
        assert tag.build == build
        assert tag.comparison_key == comparison_key

    def test_str_uses_published_tag(self):
        assert str(parse_path(path("rc1.2.3_4", "COMP"))) == "COMP:rc1.2.3_4"
        assert repr(parse_path(path("1.0", "COMP"))) == "<Tag('COMP:1.0')>"

    def test_tag_is_immutable(self):
        tag = parse_path(path("1.2.3_4"))
        with pytest.raises(AttributeError):
            tag.build = "5"
        with pytest.raises(AttributeError):
            del tag.build
        assert tag.build == "4"

    def test_malformed_paths_still_parse(self):
        for value in ["", "/", "////", "v2", "v2/COMP/manifests/", "v2/COMP/manifests/___"]:
            tag = parse_path(value)
            assert tag.is_release is False


class TestTagClassification:

    @pytest.mark.parametrize("label", [
        "1.2.3",
        "v2.0.1",
        "rc1.2",
        "3.1.2.3",
        "14.2",
        "1.2-foo",
        "1.2.",
    ])
    def test_releases(self, label):
        assert is_release(label) is True

    @pytest.mark.parametrize("label", [
        "ISSUE-1234-bug-description",
        "sprint",
        "sprint-11",
        "sprint_11",
        "11",
        "v1",
        "1.x",
        "v.1.2",
        "x1.2.3",
        "",
    ])
    def test_branches(self, label):
        assert is_release(label) is False

    def test_build_is_not_consulted(self):
        tag = parse_path(path("sprint-1.2"))
        assert tag.build == ""
        assert tag.is_release is False

        tag = parse_path(path("1.2_3"))
        assert tag.is_release is True


class TestTagOrdering:

    def test_builds_compare_numerically(self):
        subject = parse_path(path("1.2.3-3", "COMP"))
        assert compare_tags(subject, parse_path(path("1.2.3-4", "COMP"))) == -1
        assert compare_tags(subject, parse_path(path("1.2.3-14", "COMP"))) == -1
        assert compare_tags(subject, parse_path(path("2.2.3-1", "COMP"))) == -1

    @pytest.mark.parametrize("lower, higher", [
        ("1.2.3-4", "1.2.3-14"),
        ("1.2.3-14", "1.2.3-111"),
        ("1.2.3", "1.2.3.1"),
        ("1.2.2.2", "1.2.3"),
        ("1.2.3", "1.2.3-1"),
        ("1.2.3-5", "1.2.3.1-2"),
        ("2.2.2-2", "14.2.3-4"),
        ("1.0-alpha1", "1.0-beta1"),
        ("1.0-beta1", "1.0-milestone1"),
        ("1.0-milestone1", "1.0-rc1"),
        ("1.0-rc1", "1.0-snapshot"),
        ("1.0-snapshot", "1.0"),
        ("1.0", "1.0-sp1"),
        ("1.0", "1.0-alpine"),
        ("1.0-rc1", "1.0-rc2"),
        ("1.2.3-rc", "1.2.3"),
        ("1.2.3-4rc", "1.2.3-4"),
        ("1.2.3.rc1", "1.2.3"),
        ("1.2.3.alpha", "1.2.3"),
        ("1.2.3.snapshot", "1.2.3"),
        ("1.2.3", "1.2.3.0.1"),
        ("ISSUE-234-one-issue-12", "ISSUE-1000-another-issue-27"),
        ("ISSUE-1000-another-issue-27", "sprint_11-13"),
        ("branch-foo_3", "sprint-11_4"),
    ])
    def test_key_order(self, lower, higher):
        assert compare_keys(lower, higher) == -1
        assert compare_keys(higher, lower) == 1

    @pytest.mark.parametrize("left, right", [
        ("1.2.3-3", "1.2.3-3"),
        ("1.2.3-3", "1.2.3_3"),
        ("ISSUE-1", "issue-1"),
        ("1.0-a1", "1.0-alpha1"),
        ("1.0-ga", "1.0"),
        ("1.2.3", "1.2.3.0"),
        ("1.2.3", "1.2.3-0"),
        ("1.2.3.final", "1.2.3"),
    ])
    def test_key_equality(self, left, right):
        assert compare_keys(left, right) == 0

    def test_prefixes_do_not_change_rank(self):
        prefixed = parse_path(path("v1.2.3-3"))
        bare = parse_path(path("1.2.3-3"))
        assert compare_tags(prefixed, bare) == 0
        assert compare_tags(bare, prefixed) == 0
        # Same rank, but still different tags
        assert prefixed != bare

    def test_rc_ranks_below_final(self):
        assert parse_path(path("rc1.2.3")) < parse_path(path("1.2.3"))
        assert parse_path(path("rc1.2.3-4")) < parse_path(path("1.2.3-4"))
        assert parse_path(path("rc1.2.3-4")) > parse_path(path("1.2.3-3"))

    def test_anything_beats_nothing(self):
        assert compare_tags(parse_path(path("1.0")), None) == 1
        assert compare_tags(parse_path(""), None) == 1

    def test_operators(self):
        lower = parse_path(path("1.2.3-4"))
        higher = parse_path(path("1.2.3-14"))
        assert lower < higher
        assert lower <= higher
        assert higher > lower
        assert higher >= lower
        assert sorted([higher, lower]) == [lower, higher]

    def test_result_is_normalized(self):
        assert compare_keys("1.2.3-111", "1.2.3-4") == 1
        assert compare_keys("1.2.3-4", "1.2.3-111") == -1

    def test_split_key(self):
        assert split_key("v1.2rc3") == ((True, "v"), (False, 1), (True, 2), (False, "rc"), (False, 3))
        assert split_key("sprint_11-4") == ((True, "sprint"), (False, 11), (False, 4))
        assert split_key("2.2.0._beta6") == ((True, 2), (True, 2), (True, 0), (False, "beta"), (False, 6))
        assert split_key("") == ()
