"""Header alias sets per sheet type (first match wins)."""

# Daily performance report
DAILY_IDENTITY = ("CasperFHRID", "FHRID", "fhrid")
DAILY_NAME = ("Full_Name", "FullName", "Name")
DAILY_HUB = ("HubName", "Hub Name", "Hub")
DAILY_OFD = ("OFD", "OutForDelivery")
DAILY_OFP = ("OFP", "OutForPickup")
DAILY_DELIVERED = ("DEL", "Delivered")
DAILY_PICKED = ("PICK", "Picked")

# Monthly payout sheet
PAYOUT_IDENTITY = ("FHR_ID", "FHRID")
PAYOUT_PROFILE_ID = ("Profile_ID", "ProfileID")
PAYOUT_NAME = ("Full_Name", "WM_Name", "Name")
PAYOUT_HUB = ("Hub_Name", "HubName", "Hub")
PAYOUT_ACCOUNT_NUMBER = ("Account_Number", "AccountNo", "A/C Number")
PAYOUT_IFSC = ("IFSC_Code", "IFSC")
PAYOUT_WORKING_DAYS = ("Working_Days", "WorkingDays", "Days")
PAYOUT_TOTAL_ASSIGNED = ("Total_Assigned", "Assigned")
PAYOUT_NORMAL_DELIVERY = ("Total_Normal_Delivery", "Normal_Delivery")
PAYOUT_SOPSY_DELIVERED = ("SOPSY_Delivered", "SOPSY")
PAYOUT_GTNL_DELIVERED = ("GTNL_Delivered", "GTNL")
PAYOUT_U2S_SHIPMENT = ("U2S_Shipment", "U2S")
PAYOUT_TOTAL_DELIVERY = ("Total_Delivery_Count", "Total_Delivered")
PAYOUT_CONVERSION = ("Conversion", "Conversion%")
PAYOUT_LMA_BASE_RATE = ("LMA_Base_Rate", "Base_Rate")
PAYOUT_LMA_BASE_PAY = ("LMA_Base_Pay_Amt", "LMA_Base_Pay")
PAYOUT_LMA_PAY_10P = ("LMA_Pay_Amt_10P", "LMA_Pay_Amt_10%")
PAYOUT_SOPSY_PAY_18P = ("SOPSY_Base_Pay_Amt_18P", "SOPSY_Base_Pay_Amt_18%")
PAYOUT_GTNL_PAY_6P = ("GTNL_Base_Pay_Amt_6P", "GTNL_Base_Pay_Amt_6%")
PAYOUT_U25_BASE = ("U25_Base_Amt", "U2S_Base_Amt")
PAYOUT_FINAL_BASE_PAY = ("Final_Base_Pay_Amt", "Final_Base_Pay")
PAYOUT_TDS = ("TDS", "TDS_1%", "TDS_1P")
PAYOUT_FINAL_BASE_AMOUNT = ("Final_Base_Amount", "Final_Amount")
PAYOUT_ADVANCE = ("Advance", "Advance_Amount")
PAYOUT_TOTAL_PAY = ("Total_Pay_Amount", "Total_Pay", "Net_Pay")
PAYOUT_REMARK = ("Remark", "Remarks")

# Salary slip sheet
SLIP_IDENTITY = ("FHR_ID", "FHRID")
SLIP_NAME = ("Employee_Name", "Full_Name", "Name")
SLIP_DESIGNATION = ("Designation",)
SLIP_DOJ = ("Date_Of_Joining", "DOJ")
SLIP_PAY_PERIOD = ("Pay_Period",)
SLIP_PAY_DATE = ("Pay_Date",)
SLIP_ACCOUNT_NUMBER = ("Account_Number", "A/C Number", "AccountNo")
SLIP_IFSC = ("IFSC_Code", "IFSC")
SLIP_PAID_DAYS = ("Paid_Days", "Working_Days")
SLIP_LOP_DAYS = ("LOP_Days", "LOP")
SLIP_BASIC = ("Basic", "Basic_Pay")
SLIP_CONVEYANCE = ("Conveyance",)
SLIP_INCENTIVES = ("Incentives", "Incentive")
SLIP_OTHER_ALLOWANCES = ("Other_Allowances", "Other_Allowance")
SLIP_GROSS = ("Gross_Earnings", "Gross")
SLIP_TDS = ("TDS",)
SLIP_ADVANCE = ("Advance",)
SLIP_OTHER_DEDUCTIONS = ("Other_Deductions", "Other_Deduction")
SLIP_TOTAL_DEDUCTIONS = ("Total_Deductions",)
SLIP_NET_PAYABLE = ("Net_Payable", "Net_Pay", "NetPay")
