"""Basic usage example for rclist."""

from rclist import DoublyLinkedList


def main() -> None:
    """Demonstrate pushes, pops and peeks at both ends."""
    lst = DoublyLinkedList[dict]()

    print("=== Basic Two-Ended Example ===\n")

    # Producer: add work at either end
    print("Adding tasks...")
    lst.push_right({"action": "send_email", "to": "user@example.com"})
    lst.push_right({"action": "process_data", "records": 100})
    lst.push_left({"action": "generate_report", "format": "pdf"})

    print(f"List size: {len(lst)}")
    print(f"Contents: {lst.snapshot()}\n")

    # Peek without removing; the guard is released at the end of the block
    guard = lst.peek_left()
    if guard is not None:
        with guard:
            print(f"Next from the left: {guard.value}")

    # Adjust the task at the right end in place
    guard_mut = lst.peek_right_mut()
    if guard_mut is not None:
        with guard_mut:
            guard_mut.value["records"] = 250

    # Consumer: take from the left until empty
    print("\nProcessing tasks...")
    while lst:
        task = lst.pop_left()
        print(f"  Processing {task}")

    print(f"\nFinal size: {len(lst)}")
    print(f"Pop on empty list: {lst.pop_left()}")


if __name__ == "__main__":
    main()
