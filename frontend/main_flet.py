import logging

import flet as ft

from frontend.config import API_BASE, HTTP_TIMEOUT
from frontend.services.api_client import ApiClient
from frontend.services.forms import (
    DONATION_REQUIRED,
    REQUEST_REQUIRED,
    URGENCY_LEVELS,
    empty_form,
    missing_required,
    show_date,
)

logger = logging.getLogger(__name__)

URGENCY_COLORS = {
    "critical": ft.Colors.RED_100,
    "high": ft.Colors.ORANGE_100,
    "medium": ft.Colors.YELLOW_100,
    "low": ft.Colors.GREEN_100,
}


def message_banner(msg) -> ft.Container:
    ok = msg.kind == "success"
    return ft.Container(
        content=ft.Row([
            ft.Icon(ft.Icons.CHECK_CIRCLE if ok else ft.Icons.ERROR_OUTLINE,
                    color=ft.Colors.GREEN_700 if ok else ft.Colors.RED_700),
            ft.Text(msg.text, expand=True, selectable=True),
        ]),
        bgcolor=ft.Colors.GREEN_50 if ok else ft.Colors.RED_50,
        border_radius=12,
        padding=12,
    )


def chip(text: str, color) -> ft.Container:
    return ft.Container(ft.Text(text, size=12), bgcolor=color, border_radius=20,
                        padding=ft.padding.symmetric(4, 10))


# ---------------- Main app ----------------
def main(page: ft.Page):
    api = ApiClient(API_BASE, timeout=HTTP_TIMEOUT)

    page.title = "MediMatch"
    page.window_width = 1000
    page.window_height = 760
    page.scroll = ft.ScrollMode.AUTO

    content_host = ft.Container(expand=True, padding=20)

    header = ft.Container(
        ft.Row([
            ft.Row([ft.Icon(ft.Icons.FAVORITE, color=ft.Colors.BLUE_600),
                    ft.Text("MediMatch", size=24, weight="bold")]),
            ft.Text("Connecting donors with those in need", color=ft.Colors.GREY_600),
        ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
        padding=16,
        border=ft.border.only(bottom=ft.BorderSide(1, ft.Colors.GREY_200)),
    )

    def set_screen(ctrl: ft.Control):
        content_host.content = ctrl
        page.update()

    def back_button():
        return ft.TextButton("Back to Home", icon=ft.Icons.ARROW_BACK, on_click=lambda e: show_home())

    # ===== HOME =====
    def home_view():
        stats_row = ft.Row(alignment=ft.MainAxisAlignment.SPACE_AROUND)
        try:
            s = api.stats()
            numbers = [
                (s.successful_matches, "Successful Matches", ft.Colors.BLUE_600),
                (s.total_donations, "Medicine Donations", ft.Colors.GREEN_600),
                (s.total_requests, "Medicine Requests", ft.Colors.ORANGE_600),
            ]
            stats_row.controls = [
                ft.Column([ft.Text(str(n), size=28, weight="bold", color=c), ft.Text(label)],
                          horizontal_alignment=ft.CrossAxisAlignment.CENTER)
                for n, label, c in numbers
            ]
        except Exception as ex:
            logger.error("Error fetching stats: %s", ex)

        def action_card(title, description, button_text, color, on_click):
            return ft.Container(
                ft.Column([
                    ft.Text(title, size=20, weight="bold"),
                    ft.Text(description, color=ft.Colors.GREY_700),
                    ft.ElevatedButton(button_text, bgcolor=color, color=ft.Colors.WHITE, on_click=on_click),
                ], spacing=12),
                padding=24, border_radius=16, width=380,
                border=ft.border.all(1, ft.Colors.GREY_200),
            )

        return ft.Column([
            ft.Text("Connect Medicine Donors with Those in Need", size=32, weight="bold"),
            ft.Text(
                "MediMatch bridges the gap between people who have unused medications and those "
                "who need them. Requests are matched automatically with available donations.",
                color=ft.Colors.GREY_700,
            ),
            ft.Row([
                action_card("Donate Medicine", "Share your unused medications with people who need them",
                            "Start Donating", ft.Colors.BLUE_600, lambda e: show_donate()),
                action_card("Request Medicine", "Find the medications you need from generous donors",
                            "Make Request", ft.Colors.GREEN_600, lambda e: show_request()),
            ], wrap=True, spacing=20),
            stats_row,
            ft.ElevatedButton("View Active Donations & Requests", icon=ft.Icons.LIST,
                              on_click=lambda e: show_dashboard()),
        ], spacing=24)

    # ===== FORMS =====
    def form_view(title, subtitle, fields, required, submit_fn, button_text):
        """fields: name -> control with a .value; values survive a failed submit."""
        msg_host = ft.Container()
        submit_btn = ft.ElevatedButton(button_text)

        def submit(_):
            values = {name: (ctrl.value or "") for name, ctrl in fields.items()}
            missing = missing_required(values, required)
            for name, ctrl in fields.items():
                ctrl.error_text = "Required" if name in missing else None
            if missing:
                page.update()
                return

            submit_btn.disabled = True
            submit_btn.text = "Submitting..."
            msg_host.content = None
            page.update()

            msg = submit_fn(values)
            msg_host.content = message_banner(msg)
            if msg.kind == "success":
                for name, value in empty_form(fields).items():
                    fields[name].value = value
            submit_btn.disabled = False
            submit_btn.text = button_text
            page.update()

        submit_btn.on_click = submit
        return ft.Column([
            back_button(),
            ft.Text(title, size=26, weight="bold"),
            ft.Text(subtitle, color=ft.Colors.GREY_700),
            msg_host,
            *fields.values(),
            submit_btn,
        ], spacing=12, width=620)

    def donate_view():
        fields = {
            "donor_name": ft.TextField(label="Your Name *", hint_text="Enter your full name"),
            "contact": ft.TextField(label="Contact Information *", hint_text="Phone number or email"),
            "medicine_name": ft.TextField(label="Medicine Name *", hint_text="e.g., Paracetamol, Ibuprofen"),
            "quantity": ft.TextField(label="Quantity *", hint_text="e.g., 20 tablets, 100ml"),
            "expiry_date": ft.TextField(label="Expiry Date", hint_text="YYYY-MM-DD"),
            "description": ft.TextField(
                label="Additional Information", multiline=True, min_lines=3,
                hint_text="Any additional details about the medicine (condition, dosage, etc.)",
            ),
        }
        return form_view("Donate Medicine", "Help someone in need by sharing your unused medications",
                         fields, DONATION_REQUIRED, api.submit_donation, "Donate Medicine")

    def request_view():
        fields = {
            "requester_name": ft.TextField(label="Your Name *", hint_text="Enter your full name"),
            "contact": ft.TextField(label="Contact Information *", hint_text="Phone number or email"),
            "medicine_name": ft.TextField(label="Medicine Name *", hint_text="Name of the medicine you need"),
            "urgency": ft.Dropdown(
                label="Urgency Level *",
                options=[ft.dropdown.Option(u, u.capitalize()) for u in URGENCY_LEVELS],
            ),
            "location": ft.TextField(label="Location", hint_text="City or area"),
            "reason": ft.TextField(label="Reason for Request", multiline=True, min_lines=3,
                                   hint_text="Briefly describe why you need this medicine"),
        }
        return form_view("Request Medicine", "Find the medications you need from generous donors",
                         fields, REQUEST_REQUIRED, api.submit_request, "Submit Request")

    # ===== DASHBOARD =====
    def donation_card(d):
        return ft.Container(
            ft.Column([
                ft.Row([ft.Text(d.medicine_name, size=18, weight="bold"),
                        chip(d.status, ft.Colors.GREEN_100)]),
                ft.Text(f"Donor: {d.donor_name}"),
                ft.Text(d.contact),
                ft.Text(d.quantity),
                ft.Text(f"Expires: {show_date(d.expiry_date)}"),
                ft.Text(d.description or "", color=ft.Colors.GREY_700, visible=bool(d.description)),
                ft.Text(f"Added {show_date(d.created_at)}", size=12, color=ft.Colors.GREY_600),
            ], spacing=4),
            padding=16, border_radius=12, border=ft.border.all(1, ft.Colors.GREY_200),
        )

    def request_card(r):
        status_color = ft.Colors.GREEN_100 if r.status == "matched" else ft.Colors.BLUE_100
        return ft.Container(
            ft.Column([
                ft.Row([ft.Text(r.medicine_name, size=18, weight="bold"),
                        chip(f"{r.urgency} urgency", URGENCY_COLORS.get(r.urgency, ft.Colors.GREY_100)),
                        chip(r.status, status_color)]),
                ft.Text(f"Requester: {r.requester_name}"),
                ft.Text(r.contact),
                ft.Text(r.location or "Not specified"),
                ft.Text(r.reason or "", color=ft.Colors.GREY_700, visible=bool(r.reason)),
                ft.Text(f"Requested {show_date(r.created_at)}", size=12, color=ft.Colors.GREY_600),
            ], spacing=4),
            padding=16, border_radius=12, border=ft.border.all(1, ft.Colors.GREY_200),
        )

    def listing(items, card, kind, hint):
        if not items:
            return ft.Column([ft.Text(f"No {kind} yet", size=18, weight="bold"), ft.Text(hint)])
        return ft.Column([card(x) for x in items], spacing=12)

    def dashboard_view():
        donations, requests = [], []
        try:
            donations = api.list_donations()
            requests = api.list_requests()
        except Exception as ex:
            logger.error("Error fetching data: %s", ex)

        tabs = ft.Tabs(
            tabs=[
                ft.Tab(text=f"Donations ({len(donations)})",
                       content=listing(donations, donation_card, "donations",
                                       "Start by adding your first medicine donation.")),
                ft.Tab(text=f"Requests ({len(requests)})",
                       content=listing(requests, request_card, "requests",
                                       "Submit a request to find the medicine you need.")),
            ],
            selected_index=0,
            height=560,
        )
        return ft.Column([
            back_button(),
            ft.Text("Active Donations & Requests", size=26, weight="bold"),
            tabs,
        ], spacing=12)

    # ---- Screen switchers ----
    def show_home():
        set_screen(home_view())

    def show_donate():
        set_screen(donate_view())

    def show_request():
        set_screen(request_view())

    def show_dashboard():
        set_screen(ft.Column([ft.ProgressRing(), ft.Text("Loading...")]))
        set_screen(dashboard_view())

    page.on_disconnect = lambda e: api.close()

    page.add(header, content_host)
    show_home()


def run():
    logging.basicConfig(level="INFO")
    ft.app(target=main)


# ---- Flet App bootstrap ----
if __name__ == "__main__":
    run()
