import pytest

from stroom import Source
from stroom.core.errors import PipelineStateError
from stroom.core.source import as_source


def test_of_is_finite_and_ordered():
    source = Source.of(3, 1, 2)
    assert source.finite is True
    assert list(source.open()) == [3, 1, 2]
    assert source.pulled == 3


def test_sized_iterables_are_finite():
    assert Source.from_iterable([1, 2]).finite is True
    assert Source.from_iterable(range(10)).finite is True
    assert Source.from_iterable({"a": 1}).finite is True


def test_plain_iterators_have_unknown_finiteness():
    assert Source.from_iterable(iter([1, 2])).finite is None
    assert Source.from_iterable(x for x in range(3)).finite is None


def test_endless_sources_are_infinite():
    assert Source.generate(lambda: 1).finite is False
    assert Source.iterate(1, lambda x: x * 2).finite is False
    assert Source.count().finite is False


def test_generate_calls_supplier_per_pull():
    counter = iter(range(100))
    stream = Source.generate(lambda: next(counter)).open()
    assert [next(stream) for _ in range(3)] == [0, 1, 2]


def test_generate_counter_is_owned_by_the_supplier():
    def make_supplier():
        count = 0

        def supplier():
            nonlocal count
            count += 1
            return count

        return supplier

    first = Source.generate(make_supplier()).open()
    second = Source.generate(make_supplier()).open()
    assert next(first) == 1
    assert next(first) == 2
    assert next(second) == 1


def test_iterate_applies_function_repeatedly():
    stream = Source.iterate(1, lambda x: x * 2).open()
    assert [next(stream) for _ in range(5)] == [1, 2, 4, 8, 16]


def test_count_with_start_and_step():
    stream = Source.count(10, 5).open()
    assert [next(stream) for _ in range(3)] == [10, 15, 20]


def test_from_callable_stops_at_sentinel():
    values = iter([1, 2, None, 4])
    source = Source.from_callable(lambda: next(values), None)
    assert source.finite is None
    assert list(source.open()) == [1, 2]


def test_source_can_only_be_opened_once():
    source = Source.of(1, 2)
    list(source.open())
    with pytest.raises(PipelineStateError):
        source.open()


def test_close_marks_source_consumed():
    source = Source.of(1, 2)
    source.close()
    assert source.consumed
    with pytest.raises(PipelineStateError):
        source.open()


def test_close_releases_a_generator():
    closed = []

    def gen():
        try:
            yield 1
            yield 2
        finally:
            closed.append(True)

    source = Source.from_iterable(gen())
    stream = source.open()
    assert next(stream) == 1
    source.close()
    assert closed == [True]


def test_as_source():
    source = Source.of(1)
    assert as_source(source) is source
    assert isinstance(as_source([1, 2]), Source)
    with pytest.raises(TypeError):
        as_source(42)
