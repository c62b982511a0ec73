"""Jinja2 source of the invoice document."""

INVOICE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>Invoice {{ invoice_number }}</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body { font-family: Arial, sans-serif; padding: 40px; background: white; }
    .invoice-container { max-width: 800px; margin: 0 auto; background: white; padding: 40px; }
    .header { border-bottom: 2px solid #333; padding-bottom: 20px; margin-bottom: 30px; }
    .header h1 { color: #333; margin-bottom: 10px; }
    .header p { color: #666; }
    .info-section { display: flex; justify-content: space-between; margin-bottom: 30px; flex-wrap: wrap; }
    .info-box { flex: 1; min-width: 200px; margin-bottom: 20px; }
    .info-box h3 { color: #333; margin-bottom: 10px; font-size: 14px; text-transform: uppercase; }
    .info-box p { color: #666; margin: 5px 0; }
    table { width: 100%; border-collapse: collapse; margin-bottom: 30px; }
    table th { background: #333; color: white; padding: 12px; text-align: left; }
    table td { padding: 12px; border-bottom: 1px solid #ddd; }
    .text-right { text-align: right; }
    .totals-row { display: flex; justify-content: space-between; padding: 8px 0; }
    .totals-row.total { font-size: 18px; font-weight: bold; border-top: 2px solid #333; padding-top: 10px; }
    .notes { margin-top: 30px; padding: 15px; background: #f9f9f9; border-left: 4px solid #333; }
    .footer { margin-top: 40px; padding-top: 20px; border-top: 1px solid #ddd; text-align: center; color: #666; font-size: 12px; }
    @media print { .no-print { display: none; } }
  </style>
</head>
<body>
  <div class="invoice-container">
    <div class="header">
      <h1>INVOICE</h1>
      <p>{{ store_name }} | Invoice #{{ invoice_number }} | Date: {{ invoice_date }}</p>
    </div>

    <div class="info-section">
      <div class="info-box">
        <h3>Bill To</h3>
        <p><strong>{{ customer_label }}</strong></p>
        {% if customer_email %}<p>{{ customer_email }}</p>{% endif %}
        {% if bill_to %}
        {% for line in bill_to %}<p>{{ line }}</p>{% endfor %}
        {% endif %}
        {% if tax_identifier %}<p><strong>Tax ID:</strong> {{ tax_identifier }}</p>{% endif %}
      </div>
      <div class="info-box">
        <h3>Ship To</h3>
        {% if ship_to %}
        <p><strong>{{ customer_label }}</strong></p>
        {% for line in ship_to %}<p>{{ line }}</p>{% endfor %}
        {% else %}
        <p>Same as billing address</p>
        {% endif %}
      </div>
      <div class="info-box">
        <h3>Order Details</h3>
        <p><strong>Order #:</strong> {{ order_number }}</p>
        <p><strong>Status:</strong> {{ status | upper }}</p>
        <p><strong>Payment:</strong> {{ payment_method | upper }}</p>
        {% if approved_by_name %}<p><strong>Approved by:</strong> {{ approved_by_name }}</p>{% endif %}
      </div>
    </div>

    <table>
      <thead>
        <tr>
          <th>Item</th>
          <th class="text-right">Quantity</th>
          <th class="text-right">Price</th>
          <th class="text-right">Total</th>
        </tr>
      </thead>
      <tbody>
        {% for item in items %}
        <tr>
          <td>{{ item.name }}</td>
          <td class="text-right">{{ item.quantity }}</td>
          <td class="text-right">{{ item.unit_price | money }}</td>
          <td class="text-right">{{ item.line_total | money }}</td>
        </tr>
        {% endfor %}
      </tbody>
    </table>

    <div class="totals">
      <div class="totals-row"><span>Subtotal:</span><span>{{ subtotal | money }}</span></div>
      {% if tax > 0 %}
      <div class="totals-row"><span>Tax:</span><span>{{ tax | money }}</span></div>
      {% endif %}
      {% if shipping > 0 %}
      <div class="totals-row"><span>Shipping:</span><span>{{ shipping | money }}</span></div>
      {% endif %}
      <div class="totals-row total"><span>Total:</span><span>{{ total | money }}</span></div>
    </div>

    {% if notes %}
    <div class="notes"><strong>Notes:</strong> {{ notes }}</div>
    {% endif %}

    <div class="footer">
      <p>Thank you for your business!</p>
      <p>This is a computer-generated invoice.</p>
    </div>
  </div>
  {% if printable %}
  <div class="no-print" style="text-align: center; margin-top: 20px;">
    <button onclick="window.print()">Print Invoice</button>
  </div>
  {% endif %}
</body>
</html>
"""
