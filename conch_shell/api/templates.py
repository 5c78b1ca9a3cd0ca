"""HTML templates for the MBO graph listener."""

from jinja2 import DictLoader, Environment

from conch_shell.reports.display import DEFAULT_DISPLAY
from conch_shell.reports.durations import format_duration

STYLE_CSS = """
body {
	font-family: sans-serif;
}


ul {
	padding-bottom: 1em;
}
"""

_INDEX = """<html>
	<head>
		<link rel="stylesheet" href="/style.css">
	</head>
	<body>
		<h1>Conch : MBO Hardware Failures</h1>
		<h2>Text Reports</h2>

		<h3>Full Report</h3>
		<ul>
			<li><a href="/full">Text</a></li>
			<li><a href="/full.csv">CSV</a></li>
		</ul>

		<h3>Remediation Times</h3>
		<ul>
		{% for az in az_names %}
			<li><a href="/reports/times/{{ az }}">{{ az }}</a></li>
		{% endfor %}
		</ul>

		<h2>Graphs</h2>
		<h3>By Type</h3>
		<ul>
		{% for az in az_names %}
			<li><a href="/graphics/{{ az }}/by_type.png">{{ az }}</a></li>
		{% endfor %}
		</ul>

		<h3>By Vendor</h3>
		<ul>
		{% for az in az_names %}
			<li><a href="/graphics/{{ az }}/by_vendor.png">{{ az }}</a></li>
		{% endfor %}
		</ul>
	</body>
</html>
"""

_AZ = """<html>
	<head>
		<link rel="stylesheet" href="/style.css">
	</head>
	<body>
		<h1>Conch: Hardware Failures for {{ name }}</h1>

		<img src="/graphics/{{ name }}/by_type.png" />

		<ul>
		{% for type, data in dc.times_by_type|dictsort %}
			<li><a href="/reports/times/{{ name }}/{{ type }}">{{ type }}</a><ul>
				<li>Failure Count: {{ data.count }}</li>
				<li>Mean: {{ data.mean|duration }}</li>
				<li>Median: {{ data.median|duration }}</li>
			</ul></li>
		{% endfor %}
		</ul>
	</body>
</html>
"""

_COMPONENT = """<html>
	<head>
		<link rel="stylesheet" href="/style.css">
	</head>
	<body>
		<h1>Conch: Hardware Failures for {{ az }}, Type {{ name }}</h1>

		<ul>
		{% for subtype, data in subtypes|dictsort %}
			<li><a href="/reports/times/{{ az }}/{{ name }}/{{ subtype }}">{{ subtype|pretty(name) }}</a><ul>
				<li>Failure Count: {{ data.count }}</li>
				<li>Mean: {{ data.mean|duration }}</li>
				<li>Median: {{ data.median|duration }}</li>
			</ul></li>
		{% endfor %}
		</ul>
	</body>
</html>
"""

_SUBTYPE = """<html>
	<head>
		<link rel="stylesheet" href="/style.css">
	</head>
	<body>
		<h1>Conch: Hardware Failures for {{ az }}, Type {{ component }}, Subtype {{ subtype }}</h1>

		<ul>
			<li>Failure Count: {{ data.count }}</li>
			<li>Mean: {{ data.mean|duration }}</li>
			<li>Median: {{ data.median|duration }}</li>
		</ul>

		<h2>Affected Devices</h2>
		<ul>
		{% for device in data.devices %}
			<li><a href="{{ device_url(device.device_id) }}" target="_blank">{{ device.device_id }}</a><ul>
				<li>Remediation Time: {{ device.remediation_time|duration }}</li>
				<li>Results:<ul>
					<li>First Failure:<ul>
						<li>Reported: {{ device.first_fail.created }}</li>
						<li>Log: {{ device.first_fail.result.log }}</li>
					</ul></li>
					<li>First Pass:<ul>
						<li>Reported: {{ device.first_pass.created }}</li>
						<li>Log: {{ device.first_pass.result.log }}</li>
					</ul></li>
				</ul></li>
			</ul></li>
		{% endfor %}
		</ul>
	</body>
</html>
"""

templates = Environment(
    loader=DictLoader({
        "index.html": _INDEX,
        "az.html": _AZ,
        "component.html": _COMPONENT,
        "subtype.html": _SUBTYPE,
    }),
    autoescape=True,
)
templates.filters["duration"] = format_duration
templates.filters["pretty"] = DEFAULT_DISPLAY.prettify


def render(template_name: str, /, **context) -> str:
    return templates.get_template(template_name).render(**context)
