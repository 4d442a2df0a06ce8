"""
Filtering declaratively instead of with a loop and an if-statement.
"""
from stroom import filter_, from_source

numbers = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]


def main():
    print("--- Imperative ---")
    for number in numbers:
        if number > 5:
            print(number)

    print("--- Stage object ---")
    from_source(numbers).add(filter_(lambda number: number > 5)).for_each(print)

    print("--- Fluent ---")
    from_source(numbers).filter(lambda number: number > 5).for_each(print)


if __name__ == "__main__":
    main()
