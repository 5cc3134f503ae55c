"""CLI commands for management tasks."""

import asyncio
import sys
from datetime import date

from app.core.database import async_session_maker
from app.core.logging import configure_logging
from app.core.permissions import Module, Role, lookup
from app.services import leave_balance as ledger
from app.services import staff as staff_service


async def recalculate_balances(year: int) -> None:
    """Rebuild the paid leave balance of every active staff member."""
    async with async_session_maker() as db:
        staff_members = await staff_service.get_active_staff(db)
        if not staff_members:
            print("No active staff members found.")
            return

        for staff in staff_members:
            balance = await ledger.recalculate(db, staff.id, year)
            print(
                f"  {staff.name}: quota={balance.quota} used={balance.used} "
                f"pending={balance.pending} remaining={balance.remaining}"
            )

        print(f"✓ Recalculated {len(staff_members)} balance(s) for {year}")


def show_permissions(role: Role) -> None:
    """Print the capability table of a role."""
    verbs = ("view", "create", "edit", "delete", "approve")
    print(f"Permissions for role: {role.value}")
    print(f"  {'module':<22}" + "".join(f"{verb:<9}" for verb in verbs) + "qualifiers")

    for module in Module:
        record = lookup(role, module).to_dict()
        marks = "".join(f"{'x' if record[verb] else '-':<9}" for verb in verbs)
        qualifiers = ", ".join(
            name for name, value in record.items() if name not in verbs and value
        )
        print(f"  {module.value:<22}{marks}{qualifiers}")


def main() -> None:
    """CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: python -m app.cli <command>")
        print("Commands:")
        print("  recalculate-balances [year]")
        print("  show-permissions <role>")
        sys.exit(1)

    configure_logging()
    command = sys.argv[1]

    if command == "recalculate-balances":
        if len(sys.argv) > 3:
            print("Usage: python -m app.cli recalculate-balances [year]")
            sys.exit(1)

        year = date.today().year
        if len(sys.argv) == 3:
            try:
                year = int(sys.argv[2])
            except ValueError:
                print(f"Error: Invalid year {sys.argv[2]!r}")
                sys.exit(1)
        asyncio.run(recalculate_balances(year))
    elif command == "show-permissions":
        if len(sys.argv) != 3:
            print("Usage: python -m app.cli show-permissions <role>")
            sys.exit(1)

        try:
            role = Role(sys.argv[2])
        except ValueError:
            print(f"Error: Unknown role {sys.argv[2]!r}")
            print(f"Roles: {', '.join(r.value for r in Role)}")
            sys.exit(1)
        show_permissions(role)
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
