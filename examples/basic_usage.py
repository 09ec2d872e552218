"""Basic usage example for linkedmultimap."""

from linkedmultimap import LinkedListMultimap


def main() -> None:
    """Demonstrate the two iteration orders."""
    headers = LinkedListMultimap[str, str]()

    print("=== Basic Multimap Example ===\n")

    headers.put("Accept", "text/html")
    headers.put("Cookie", "session=abc")
    headers.put("Accept", "application/json")
    headers.put("Cookie", "theme=dark")

    print("Entries in insertion order:")
    for key, value in headers.entries():
        print(f"  {key}: {value}")

    print(f"\nDistinct keys: {list(headers.key_set())}")
    print(f"Accept values: {list(headers.get('Accept'))}")
    print(f"Size: {len(headers)}\n")

    # Existing entries keep their place; the extra value goes last
    old = headers.replace_values("Accept", ["*/*", "text/plain"])
    print(f"Replaced Accept values {old}")
    print(f"Entries now: {[tuple(entry) for entry in headers.entries()]}\n")

    headers.remove("Cookie", "session=abc")
    print(f"After removing one cookie: {headers}")


if __name__ == "__main__":
    main()
