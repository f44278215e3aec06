from cellsheet.spreadsheet import Spreadsheet


def main() -> None:
    """Run a fixed sequence of set/get calls and print the results."""
    sheet = Spreadsheet()

    steps = [
        ("a1", 13, "A1 = 13"),
        ("A2", 14, "A2 = 14"),
        ("a3", "=A1+ A2", "A3 = 13 + 14"),
        ("A4", "=A1+ A2 + a3", "A4 = 13 + 14 + 27"),
        ("A5", "=(A1+ A2 )* a3", "A5 = (13 + 14) * 27"),
        ("A6", "=(A18+ A2 )/ 14", "A6 = (0 + 14) / 14"),
    ]
    for cell_id, value, label in steps:
        sheet.set_cell_value(cell_id, value)
        print(f"{label} <--> {sheet.get_cell_value(cell_id)}")


if __name__ == "__main__":
    main()
