"""Drain a list from both ends with the consuming iterator."""

import logging

from rclist import DoublyLinkedList


def main() -> None:
    """Interleave next() and next_back() until the two fronts meet."""
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    lst = DoublyLinkedList[int]()
    for i in range(1, 8):
        lst.push_left(i)
    print(f"Contents: {lst.snapshot()}")

    it = lst.into_iter()
    print(f"Source list after into_iter(): {lst}")

    turn = 0
    while True:
        try:
            if turn % 2 == 0:
                print(f"  front -> {next(it)}")
            else:
                print(f"  back  -> {it.next_back()}")
        except StopIteration:
            print("  exhausted")
            break
        turn += 1

    # A long list is released iteratively; the debug log reports the count
    with DoublyLinkedList(range(100_000)) as big:
        print(f"\nBuilt a list of {len(big)} elements")


if __name__ == "__main__":
    main()
