"""
Sign-up page served on GET /api/register.

A self-contained HTML form that posts JSON to the registration endpoint
and shows the returned error code.
"""

SIGNUP_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Register</title>
</head>
<body>
  <h1>Create an applicant account</h1>
  <form id="register-form">
    <label>Name <input name="name"></label><br>
    <label>Surname <input name="surname"></label><br>
    <label>Personal number <input name="pnr"></label><br>
    <label>Email <input name="email" type="email"></label><br>
    <label>Username <input name="username"></label><br>
    <label>Password <input name="password" type="password"></label><br>
    <button type="submit">Register</button>
  </form>
  <p id="result"></p>
  <script>
    document.getElementById("register-form").addEventListener("submit", async (event) => {
      event.preventDefault();
      const payload = Object.fromEntries(new FormData(event.target).entries());
      const response = await fetch("/api/register", {
        method: "POST",
        headers: {"Content-Type": "application/json"},
        body: JSON.stringify(payload),
      });
      const result = document.getElementById("result");
      if (response.ok) {
        result.textContent = "Registration successful";
      } else {
        const body = await response.json();
        result.textContent = "Registration failed: " + body.error;
      }
    });
  </script>
</body>
</html>
"""
