"""
Tests for the order in which elements flow through stateless and stateful stages.
"""
from stroom import Source, from_source, of


def trace_pipeline(with_sorted: bool):
    events = []
    pipeline = (
        of(1, 2, 3, 4, 5, 6)
        .peek(lambda n: events.append(("source", n)))
        .filter(lambda n: n % 2 == 0)
        .peek(lambda n: events.append(("filtered", n)))
    )
    if with_sorted:
        pipeline.sorted().peek(lambda n: events.append(("sorted", n)))
    pipeline.for_each(lambda n: events.append(("final", n)))
    return events


def test_stateless_chain_processes_one_element_at_a_time():
    events = trace_pipeline(with_sorted=False)
    assert events == [
        ("source", 1),
        ("source", 2), ("filtered", 2), ("final", 2),
        ("source", 3),
        ("source", 4), ("filtered", 4), ("final", 4),
        ("source", 5),
        ("source", 6), ("filtered", 6), ("final", 6),
    ]


def test_sorted_buffers_its_whole_upstream_before_emitting():
    events = trace_pipeline(with_sorted=True)
    first_sorted = events.index(("sorted", 2))
    before, after = events[:first_sorted], events[first_sorted:]

    assert all(kind in ("source", "filtered") for kind, _ in before)
    assert [n for kind, n in before if kind == "source"] == [1, 2, 3, 4, 5, 6]
    assert after == [
        ("sorted", 2), ("final", 2),
        ("sorted", 4), ("final", 4),
        ("sorted", 6), ("final", 6),
    ]


def test_rejected_elements_never_reach_later_stages():
    later = []
    of(1, 2, 3, 4).filter(lambda n: n > 2).peek(later.append).map(lambda n: n * 10).collect()
    assert later == [3, 4]


def test_limit_does_not_overpull_an_infinite_source():
    pulls = []

    def supplier():
        pulls.append(len(pulls))
        return pulls[-1]

    pipeline = from_source(Source.generate(supplier)).limit(3)
    assert pipeline.collect() == [0, 1, 2]
    assert pulls == [0, 1, 2]
    assert pipeline.source.pulled == 3


def test_limit_after_filter_pulls_only_what_is_needed():
    pipeline = from_source(Source.count(1)).filter(lambda n: n % 3 == 0).limit(2)
    assert pipeline.collect() == [3, 6]
    assert pipeline.source.pulled == 6


def test_sorted_resumes_per_element_flow_downstream():
    downstream = []
    result = (
        of(3, 1, 2)
        .sorted()
        .peek(downstream.append)
        .find_first()
    )
    assert result == 1
    assert downstream == [1]


def test_flat_map_outputs_flow_before_next_pull():
    events = []
    (
        of(1, 2)
        .peek(lambda n: events.append(("pull", n)))
        .flat_map(lambda n: [n, n])
        .for_each(lambda n: events.append(("out", n)))
    )
    assert events == [("pull", 1), ("out", 1), ("out", 1), ("pull", 2), ("out", 2), ("out", 2)]


def test_early_stop_closes_stage_generators():
    closed = []

    def numbers():
        try:
            n = 0
            while True:
                yield n
                n += 1
        finally:
            closed.append(True)

    assert from_source(numbers()).map(lambda n: n * 2).find_first() == 0
    assert closed == [True]
