"""Plain-text blocks shared by the order templates."""


def menu_lines(context: dict) -> str:
    lines = []
    for menu in context.get("order_menus") or []:
        lines.append(f"{menu.get('menu_quantity', 1)} x {menu.get('menu_name', '')}  {menu.get('menu_subtotal', '')}")
        for option in (menu.get("menu_options") or "").splitlines():
            lines.append(f"    + {option}")
        if menu.get("menu_comment"):
            lines.append(f"    \"{menu['menu_comment']}\"")
    return "\n".join(lines)


def total_lines(context: dict) -> str:
    return "\n".join(
        f"{total.get('order_total_title', '')}: {total.get('order_total_value', '')}"
        for total in context.get("order_totals") or []
    )
