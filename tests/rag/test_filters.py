from rag_context.rag.filters import Equals, Exists, Predicate, Regex, loose_equals, matches_all, parse_filter, parse_filters


def test_parse_filter_tags():
    fn = lambda v, m: True  # noqa: E731
    assert parse_filter("a", None) == Exists("a")
    assert parse_filter("a", fn) == Predicate("a", fn)
    assert parse_filter("a", "/^wi/") == Regex("a", "^wi")
    assert parse_filter("a", "wiki") == Equals("a", "wiki")
    assert parse_filter("a", "/") == Equals("a", "/")
    spec = Equals("other", 1)
    assert parse_filter("a", spec) is spec


def test_exists():
    specs = parse_filters({"source": None})
    assert matches_all({"source": None}, specs)
    assert not matches_all({"lang": "en"}, specs)


def test_predicate_receives_value_and_metadata():
    seen = []

    def pred(value, metadata):
        seen.append((value, metadata))
        return value > 2

    specs = parse_filters({"rank": pred})
    assert matches_all({"rank": 3}, specs)
    assert not matches_all({"rank": 1}, specs)
    assert seen[0] == (3, {"rank": 3})


def test_regex_matches_stringified_value():
    specs = parse_filters({"year": "/^20(1|2)\\d$/"})
    assert matches_all({"year": 2021}, specs)
    assert matches_all({"year": "2019"}, specs)
    assert not matches_all({"year": 1999}, specs)
    assert not matches_all({}, specs)


def test_equality_is_loose():
    assert loose_equals(1, "1")
    assert loose_equals("2.0", 2)
    assert loose_equals("wiki", "wiki")
    assert not loose_equals("wiki", "blog")
    assert not loose_equals("abc", 0)
    assert not loose_equals(None, "x")


def test_all_filters_must_pass():
    specs = parse_filters({"source": "wiki", "lang": "/^en/"})
    assert matches_all({"source": "wiki", "lang": "en-GB"}, specs)
    assert not matches_all({"source": "wiki", "lang": "de"}, specs)
    assert not matches_all({"source": "blog", "lang": "en"}, specs)


def test_dotted_keys_reach_nested_metadata():
    specs = parse_filters({"author.name": "ada"})
    assert matches_all({"author": {"name": "ada"}}, specs)
    assert not matches_all({"author": {"name": "bob"}}, specs)
    assert matches_all({"author.name": "ada"}, specs)
    assert matches_all({"author": {}}, parse_filters({"author": None}))
    assert not matches_all({"author": {}}, parse_filters({"author.name": None}))


def test_no_filters_match_everything():
    assert matches_all({}, [])
