"""
An endless source, bounded by `limit`.

The supplier keeps its own counter in a closure, so every Source built from
a fresh supplier starts again at 'Hello 0'. Without the `limit` stage this
pipeline would never finish.
"""
from stroom import STOP, Source, from_source


class HelloSupplier:
    """The long-hand way: a callable object holding the counter."""

    def __init__(self):
        self.count = 0

    def __call__(self) -> str:
        value = f"Hello {self.count}"
        self.count += 1
        return value


def main():
    print("--- Bounded by a limit stage ---")
    from_source(Source.generate(HelloSupplier())).limit(3).for_each(print)

    print("--- Bounded by the consumer ---")
    seen = []

    def consumer(item: str):
        seen.append(item)
        print(item)
        if len(seen) == 2:
            return STOP

    from_source(Source.generate(HelloSupplier())).for_each(consumer)


if __name__ == "__main__":
    main()
