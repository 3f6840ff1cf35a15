from bff.core.paginate import paginate


def test_first_page():
    data, meta = paginate(list(range(25)), page=1, page_size=10)
    assert data == list(range(10))
    assert meta == {"page": 1, "pageSize": 10, "total": 25, "totalPages": 3}


def test_last_partial_page():
    data, _ = paginate(list(range(25)), page=3, page_size=10)
    assert data == [20, 21, 22, 23, 24]


def test_page_past_the_end_is_empty():
    data, meta = paginate([1, 2], page=5, page_size=10)
    assert data == []
    assert meta["totalPages"] == 1


def test_empty_input():
    data, meta = paginate([], page=1, page_size=10)
    assert data == []
    assert meta["totalPages"] == 0
