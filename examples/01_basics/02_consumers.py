"""
Three ways of writing the same consumer: a callable object, a lambda, and a
plain function reference. All three print the numbers 1 to 10.
"""
from stroom import of


class Printer:
    def __call__(self, item: int) -> None:
        print(item)


def main():
    print("--- Callable object ---")
    of(1, 2, 3, 4, 5, 6, 7, 8, 9, 10).for_each(Printer())

    print("--- Lambda ---")
    of(1, 2, 3, 4, 5, 6, 7, 8, 9, 10).for_each(lambda item: print(item))

    print("--- Function reference ---")
    of(1, 2, 3, 4, 5, 6, 7, 8, 9, 10).for_each(print)


if __name__ == "__main__":
    main()
