from pathlib import Path

from rundown import storage
from rundown.algorithms import get_algorithms
from rundown.roster import load_roster_csv


def main(
    algorithm,
    namelist,
    name,
    event_code=None,
    output_dir=None,
    export=True,
):
    """Generate the rundown for a namelist, print a summary and export it.

    Args:
        algorithm: Algorithm name to run.
        namelist: Namelist instance to mutate.
        name: Competition name, used for titles and file names.
        event_code: Optional event to reschedule on its own (append mode).
        output_dir: Folder for CSV/PDF outputs; defaults to the working directory.
        export: Whether to write CSV/PDF outputs.
    """

    algos = get_algorithms()
    if algorithm not in algos:
        raise ValueError(f"Unknown algorithm: {algorithm}")
    this_algorithm = algos[algorithm]()  # instantiate
    this_algorithm.generate(namelist, event_code)

    print_rundown_summary(namelist, event_code)

    if export:
        export_rundown(namelist, name, event_code=event_code, output_dir=output_dir)
        print()


def load_namelist(
    data_file,
    roster_csv=None,
    rundown=None,
    event_rundowns=None,
    entry_codes=None,
    verbose=True,
):
    """Load a namelist document and apply project configuration to it.

    Args:
        data_file: Path to the JSON namelist document.
        roster_csv: Optional roster CSV merged into the participants by id.
        rundown: Optional default RundownConfig.
        event_rundowns: Optional mapping of event code to RundownConfig.
        entry_codes: Optional mapping of event code to {division: prefix}.
        verbose: Whether to print what was loaded.

    Returns:
        Namelist: The loaded namelist.
    """

    namelist = storage.load_namelist(data_file)

    if roster_csv:
        imported = load_roster_csv(roster_csv)
        namelist.upsert_participants(imported)
        namelist.sanitize()
        if verbose:
            print(f"\n  Imported {len(imported)} roster rows from {roster_csv}")

    if rundown is not None:
        namelist.update_rundown_config(rundown)
    for event_code, config in (event_rundowns or {}).items():
        namelist.update_rundown_config(config, event_code)
    for event_code, prefixes in (entry_codes or {}).items():
        for division_name, prefix in prefixes.items():
            namelist.set_entry_code(event_code, division_name, prefix)

    if verbose:
        print_namelist_summary(namelist)

    return namelist


def print_namelist_summary(namelist):

    print(f"\n  Entries per event")
    print(f"  -----------------\n")
    any_entries = False
    for bucket in namelist.hierarchy:
        if not bucket.count:
            continue
        any_entries = True
        print(f"  {bucket.event.code.rjust(12)}: {bucket.count}")
        for division in bucket.divisions:
            if division.count:
                code = division.entry_code or "-"
                print(f"  {'':12}    {code.ljust(2)} {division.division}: {division.count}")
    if not any_entries:
        print("    No entries.")


def print_rundown_summary(namelist, event_code=None):

    heats = namelist.get_heats(event_code)
    header = f"Rundown ({len(heats)} heats)"
    print(f"\n  {header}")
    print(f"  {'-' * len(header)}\n")
    if not heats:
        print("    Nothing scheduled.")
        return
    for h in heats:
        print(
            f"    Heat {str(h.number).rjust(3)} | {h.schedule_time} | "
            f"{', '.join(h.event_codes)} | {len(h.get_entries())} entries"
        )


def export_rundown(namelist, name, event_code=None, output_dir=None):
    """Write the rundown CSV and PDF and return their paths."""

    output_dir = Path(output_dir) if output_dir else Path.cwd()
    output_dir.mkdir(parents=True, exist_ok=True)
    stem = f"{name}-{event_code}" if event_code else name

    csv_path = output_dir / f"{stem}.csv"
    namelist.to_csv(csv_path, event_code)
    print(f"\n  Rundown sheet saved to {csv_path}")

    pdf_path = output_dir / f"{stem}.pdf"
    namelist.to_pdf(pdf_path, title=name, event_code=event_code)
    print(f"\n  Rundown printout saved to {pdf_path}")

    return csv_path, pdf_path
