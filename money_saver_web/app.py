import os

from flask import Flask, jsonify, render_template, request

from money_saver.data_models import DEFAULT_INPUTS, OPPORTUNITY_COST_PERCENT, CalculationResult, LoanInputs
from money_saver.engine import compute_from_inputs
from money_saver.formatter import format_input_value, result_rows, summary_sentence
from money_saver.utils import parse_number

app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")


def _form_to_inputs(form) -> LoanInputs:
    """Parse the four form fields leniently; unusable fields become ``None``."""
    return LoanInputs(
        principal=parse_number(form.get("principal")),
        annual_rate_percent=parse_number(form.get("rate")),
        tenure_years=parse_number(form.get("tenure")),
        offset=parse_number(form.get("offset")),
    )


def _inputs_for_view(inputs: LoanInputs) -> dict:
    """Return the grouped values shown back in the input fields."""
    return {
        "principal": format_input_value(inputs.principal),
        "rate": format_input_value(inputs.annual_rate_percent),
        "tenure": format_input_value(inputs.tenure_years),
        "offset": format_input_value(inputs.offset),
    }


def _payload_value(data: dict, name: str):
    value = data.get(name)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return None
    return parse_number(str(value))


def _run_analysis(inputs: LoanInputs) -> CalculationResult:
    result = compute_from_inputs(inputs)
    if result.is_undefined:
        app.logger.info("Calculation left undefined for inputs %s", inputs)
    return result


@app.route("/", methods=["GET", "POST"])
def index():
    inputs = DEFAULT_INPUTS
    result = CalculationResult.undefined()
    action = "calculate"

    if request.method == "POST":
        action = request.form.get("action", "calculate")
        if action != "reset":
            inputs = _form_to_inputs(request.form)
            result = _run_analysis(inputs)

    return render_template(
        "index.html",
        values=_inputs_for_view(inputs),
        rows=result_rows(result),
        summary=summary_sentence(result),
        opportunity_cost=OPPORTUNITY_COST_PERCENT,
        asset_version=app.config["ASSET_VERSION"],
        last_action=action,
    )


@app.post("/api/calculate")
def api_calculate():
    """Compute a result from a JSON body with principal, rate, tenure and offset."""
    if not request.is_json:
        return jsonify({"error": "Invalid Content-Type. Must be application/json."}), 400
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object."}), 400

    inputs = LoanInputs(
        principal=_payload_value(data, "principal"),
        annual_rate_percent=_payload_value(data, "rate"),
        tenure_years=_payload_value(data, "tenure"),
        offset=_payload_value(data, "offset"),
    )
    result = _run_analysis(inputs)
    return jsonify(
        {
            "inputs": {
                "principal": inputs.principal,
                "rate": inputs.annual_rate_percent,
                "tenure": inputs.tenure_years,
                "offset": inputs.offset,
            },
            "result": result.to_dict(),
            "formatted": dict(result_rows(result)),
            "summary": summary_sentence(result),
            "opportunity_cost_percent": OPPORTUNITY_COST_PERCENT,
        }
    )


if __name__ == "__main__":
    print("Starting Money Saver web app...")
    app.run(
        host=os.environ.get("MONEY_SAVER_HOST", "0.0.0.0"),
        port=int(os.environ.get("MONEY_SAVER_PORT", "8710")),
        debug=True,
    )
