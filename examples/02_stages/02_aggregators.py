"""
Stateful stages and reducing terminals.
"""
from stroom import Source, aggregator_stage, from_source, of


@aggregator_stage
def running_total(items):
    """A custom barrier stage: sees the whole upstream as a list."""
    total = 0
    for item in items:
        total += item
        yield total


def main():
    print("--- Distinct, first occurrence wins ---")
    print(of(3, 1, 3, 2, 1).distinct().to_list())

    print("--- Skip and limit over an endless counter ---")
    print(from_source(Source.count(0)).skip(5).limit(3).to_list())

    print("--- Custom aggregator ---")
    print(of(1, 2, 3, 4).add(running_total).to_list())

    print("--- Reduce ---")
    print("Total sum:", of(*range(10)).reduce(lambda acc, x: acc + x, 0))


if __name__ == "__main__":
    main()
