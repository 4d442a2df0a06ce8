"""
Stateless vs stateful stages, traced with peek.

With only stateless stages each element travels the whole chain before the
next one is pulled, so the trace lines interleave. `sorted` is stateful: it
buffers every element first, so all 'Filter done' lines come before the
first 'Sorted done' line.
"""
from stroom import of


def main():
    print("--- Stateless only ---")
    (
        of(1, 2, 3, 4, 5, 6, 7, 8, 9, 10)
        .peek(lambda num: print(f"peek element from the stream {num}"))
        .filter(lambda num: num % 2 == 0)
        .peek(lambda num: print(f"Filter done for the element {num}"))
        .for_each(lambda num: print(f"Final output: {num}"))
    )

    print("--- With sorted ---")
    (
        of(1, 2, 3, 4, 5, 6, 7, 8, 9, 10)
        .peek(lambda num: print(f"peek element from the stream {num}"))
        .filter(lambda num: num % 2 == 0)
        .peek(lambda num: print(f"Filter done for the element {num}"))
        .sorted()
        .peek(lambda num: print(f"Sorted done for the element {num}"))
        .for_each(lambda num: print(f"Final output: {num}"))
    )


if __name__ == "__main__":
    main()
