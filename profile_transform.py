#!/usr/bin/env python3
"""Profile htmlbind to find performance bottlenecks."""

import cProfile
import io
import pstats

from htmlbind import HTMLBindingTransform

# Sample template
html = """
<!DOCTYPE html>
<html>
<head><title>{{ title }}</title></head>
<body>
    <div class="container {theme}">
        <p>Hello {user.name}, you have {count} messages</p>
        <p>{{#if admin}}Admin {role}{{/if}}</p>
        <table>
            <tr><td>{row.a}</td><td>Cell {row.b}</td></tr>
            <tr><td><b>x</b>{row.c}</td><td value="{row.d}"></td></tr>
        </table>
    </div>
</body>
</html>
""" * 100  # Repeat for more meaningful results

binder = HTMLBindingTransform()

# Profile
pr = cProfile.Profile()
pr.enable()

for _ in range(10):
    result = binder.transform(html)

pr.disable()

# Print stats
s = io.StringIO()
ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
ps.print_stats(50)  # Top 50 functions
print(s.getvalue())
