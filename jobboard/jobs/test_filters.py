from werkzeug.datastructures import MultiDict

from jobboard.jobs.filters import JobFilter, parse_pagination


def test_empty_filter_only_selects_active_jobs():
    assert JobFilter().to_query() == {"isActive": True}


def test_every_filter_maps_to_its_query_operator():
    args = MultiDict({
        "search": "python engineer",
        "category": "tech",
        "location": "berlin",
        "employmentType": "Contract",
        "experienceLevel": "Senior",
        "isRemote": "true",
        "isHybrid": "true",
        "isOnsite": "true",
    })

    assert JobFilter.from_args(args).to_query() == {
        "isActive": True,
        "$text": {"$search": "python engineer"},
        "category": "tech",
        "location": {"$regex": "berlin", "$options": "i"},
        "employmentType": "Contract",
        "experienceLevel": "Senior",
        "isRemote": True,
        "isHybrid": True,
        "isOnsite": True,
    }


def test_boolean_filters_only_recognise_literal_true():
    for value in ("false", "True", "1", "yes", ""):
        query = JobFilter(is_remote=value, is_hybrid=value, is_onsite=value).to_query()
        assert query == {"isActive": True}, value


def test_empty_string_args_are_ignored():
    args = MultiDict({"category": "", "location": "", "search": ""})
    assert JobFilter.from_args(args) == JobFilter()


def test_is_active_cannot_be_overridden_from_args():
    args = MultiDict({"isActive": "false"})
    assert JobFilter.from_args(args).to_query() == {"isActive": True}


def test_pagination_defaults():
    assert parse_pagination(MultiDict()) == (1, 3)
    assert parse_pagination(MultiDict(), default_limit=10) == (1, 10)


def test_pagination_reads_numbers():
    assert parse_pagination(MultiDict({"page": "4", "limit": "12"})) == (4, 12)


def test_pagination_clamps_out_of_range_values():
    assert parse_pagination(MultiDict({"page": "0", "limit": "0"})) == (1, 3)
    assert parse_pagination(MultiDict({"page": "-2", "limit": "-5"})) == (1, 3)
    assert parse_pagination(MultiDict({"limit": "5000"}), max_limit=100) == (1, 100)


def test_pagination_ignores_garbage():
    assert parse_pagination(MultiDict({"page": "abc", "limit": "1.5"})) == (1, 3)
