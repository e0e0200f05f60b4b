def main() -> None:
    print("demo run!")
